"""Device pool endpoints: registry, checkout and feedback."""
from datetime import datetime

from fastapi import APIRouter, Depends, status

from device_pool.core.security import get_current_account
from device_pool.interfaces.http.deps import (
    get_checkout_coordinator,
    get_feedback_service,
    get_registry_service,
    get_request_time,
)
from device_pool.interfaces.http.errors import to_http_exception
from device_pool.modules.accounts import Account
from device_pool.modules.checkout import CheckoutCoordinator
from device_pool.modules.common.exceptions import DevicePoolError
from device_pool.modules.devices import DeviceRegistration, DeviceRegistryService
from device_pool.modules.feedback import FeedbackLedgerService
from device_pool.schemas import (
    DeviceCreate,
    DeviceResponse,
    FeedbackCreate,
    FeedbackResponse,
    MessageResponse,
)

router = APIRouter()


def _to_schema(device) -> DeviceResponse:
    return DeviceResponse.model_validate(device)


def _to_schemas(devices) -> list[DeviceResponse]:
    return [_to_schema(device) for device in devices]


def _ledger(entries) -> list[FeedbackResponse]:
    return [FeedbackResponse.model_validate(entry) for entry in entries]


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED, summary="Register a device")
async def register_device(
    payload: DeviceCreate,
    account: Account = Depends(get_current_account),
    now: datetime = Depends(get_request_time),
    service: DeviceRegistryService = Depends(get_registry_service),
) -> DeviceResponse:
    try:
        device = await service.register_device(
            DeviceRegistration(
                model=payload.model,
                os=payload.os,
                manufacturer=payload.manufacturer,
                registered_by=account.id,
            ),
            now=now,
        )
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return _to_schema(device)


@router.get("", response_model=list[DeviceResponse], summary="List all devices")
async def list_devices(service: DeviceRegistryService = Depends(get_registry_service)):
    return _to_schemas(await service.list_devices())


@router.get("/{device_id}", response_model=DeviceResponse, summary="Device details")
async def get_device(device_id: str, service: DeviceRegistryService = Depends(get_registry_service)):
    try:
        return _to_schema(await service.get_device(device_id))
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/{device_id}", response_model=MessageResponse, summary="Remove a device")
async def remove_device(
    device_id: str,
    account: Account = Depends(get_current_account),
    service: DeviceRegistryService = Depends(get_registry_service),
) -> MessageResponse:
    try:
        await service.remove_device(device_id, account.id)
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(msg="Device removed")


@router.put("/feedback/{device_id}", response_model=list[FeedbackResponse], summary="Review a device")
async def add_feedback(
    device_id: str,
    payload: FeedbackCreate,
    account: Account = Depends(get_current_account),
    now: datetime = Depends(get_request_time),
    service: FeedbackLedgerService = Depends(get_feedback_service),
):
    try:
        entries = await service.add_feedback(
            device_id,
            account.id,
            account.name,
            payload.rating,
            payload.text,
            now=now,
        )
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return _ledger(entries)


@router.delete("/feedback/{device_id}", response_model=list[FeedbackResponse], summary="Delete own review")
async def remove_feedback(
    device_id: str,
    account: Account = Depends(get_current_account),
    service: FeedbackLedgerService = Depends(get_feedback_service),
):
    try:
        entries = await service.remove_feedback(device_id, account.id)
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return _ledger(entries)


@router.post("/checkout/{device_id}", response_model=list[DeviceResponse], summary="Check out a device")
async def check_out(
    device_id: str,
    account: Account = Depends(get_current_account),
    now: datetime = Depends(get_request_time),
    coordinator: CheckoutCoordinator = Depends(get_checkout_coordinator),
):
    try:
        devices = await coordinator.check_out(device_id, account.id, now)
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return _to_schemas(devices)


@router.post("/checkin/{device_id}", response_model=list[DeviceResponse], summary="Check in a device")
async def check_in(
    device_id: str,
    account: Account = Depends(get_current_account),
    now: datetime = Depends(get_request_time),
    coordinator: CheckoutCoordinator = Depends(get_checkout_coordinator),
):
    try:
        devices = await coordinator.check_in(device_id, account.id, now)
    except DevicePoolError as exc:
        raise to_http_exception(exc) from exc
    return _to_schemas(devices)
