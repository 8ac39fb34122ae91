# Routes package init
"""
Field Manager Backend: API Routes Package
=========================================

Route Inventory:
    - users.py:              /api/users, /api/users/{id}, /api/users/{id}/fields
    - fields.py:             /api/fields, /api/fields/{id}, /api/fields/{id}/devicecontrollers
    - device_controllers.py: /api/devicecontrollers, /api/devicecontrollers/{id}
    - health.py:             /health

Routes are thin: they extract path and body data, call the matching
service, and set status codes and headers. Business rules live in services.
"""
