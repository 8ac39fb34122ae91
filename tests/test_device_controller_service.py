"""
Field Manager Backend: DeviceController Service Unit Tests
==========================================================
"""

import pytest

from fieldmanager.exceptions import ConcurrencyError, DatabaseError, NotFoundError
from fieldmanager.models import DeviceController
from fieldmanager.schemas.device_controller import DeviceControllerRequest
from fieldmanager.services.device_controller_service import DeviceControllerService


class TestDeviceControllerService:

    @pytest.mark.asyncio
    async def test_create_does_not_look_up_field(self, mock_gateway, saved_entities):
        result = await DeviceControllerService(mock_gateway).create_controller(
            DeviceControllerRequest(type="Irrigation", field_id=3)
        )

        assert (result.id, result.type, result.field_id) == (1, "Irrigation", 3)
        mock_gateway.field_exists.assert_not_awaited()
        mock_gateway.get_field.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_storage_failure_propagates(self, mock_gateway):
        mock_gateway.save.side_effect = DatabaseError()

        with pytest.raises(DatabaseError):
            await DeviceControllerService(mock_gateway).create_controller(
                DeviceControllerRequest(type="Sensor", field_id=999)
            )

    @pytest.mark.asyncio
    async def test_get_missing_controller(self, mock_gateway):
        mock_gateway.get_controller.return_value = None

        with pytest.raises(NotFoundError, match="DeviceController with ID 12 not found"):
            await DeviceControllerService(mock_gateway).get_controller(12)

    @pytest.mark.asyncio
    async def test_list_controllers(self, mock_gateway):
        mock_gateway.list_controllers.return_value = [
            DeviceController(id=1, type="Irrigation", field_id=1),
            DeviceController(id=2, type="Sensor", field_id=1),
        ]

        result = await DeviceControllerService(mock_gateway).list_controllers()

        assert [c.type for c in result] == ["Irrigation", "Sensor"]

    @pytest.mark.asyncio
    async def test_update_controller(self, mock_gateway):
        controller = DeviceController(id=4, type="Irrigation", field_id=1)
        mock_gateway.get_controller.return_value = controller

        await DeviceControllerService(mock_gateway).update_controller(
            4, DeviceControllerRequest(type="Sensor", field_id=2)
        )

        assert (controller.id, controller.type, controller.field_id) == (4, "Sensor", 2)
        mock_gateway.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_after_concurrent_delete_is_not_found(self, mock_gateway):
        mock_gateway.get_controller.return_value = DeviceController(id=4, type="X", field_id=1)
        mock_gateway.save.side_effect = ConcurrencyError()
        mock_gateway.controller_exists.return_value = False

        with pytest.raises(NotFoundError):
            await DeviceControllerService(mock_gateway).update_controller(
                4, DeviceControllerRequest(type="Sensor", field_id=1)
            )

    @pytest.mark.asyncio
    async def test_delete_controller(self, mock_gateway):
        controller = DeviceController(id=4, type="Irrigation", field_id=1)
        mock_gateway.get_controller.return_value = controller

        await DeviceControllerService(mock_gateway).delete_controller(4)

        mock_gateway.delete.assert_awaited_once_with(controller)

    @pytest.mark.asyncio
    async def test_delete_missing_controller(self, mock_gateway):
        mock_gateway.get_controller.return_value = None

        with pytest.raises(NotFoundError):
            await DeviceControllerService(mock_gateway).delete_controller(4)
        mock_gateway.save.assert_not_awaited()
