# Services package init
"""
Field Manager Backend: Services Layer
=====================================

What:  Resource handlers sitting between routes (HTTP) and the persistence
       gateway.
How:   Each service is constructed with a PersistenceGateway; FastAPI builds
       one per request through the get_*_service dependencies.

Service Inventory:
    - UserService: users, and the fields a user owns
    - FieldService: fields, and the device controllers on a field
    - DeviceControllerService: device controllers
"""
