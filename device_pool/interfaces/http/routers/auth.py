"""Authentication endpoints issuing bearer tokens for pool users."""
from fastapi import APIRouter, Depends, HTTPException, status

from device_pool.core.security import create_access_token, get_current_account
from device_pool.core.container import ApplicationContainer
from device_pool.interfaces.http.deps import get_account_service, get_container
from device_pool.modules.accounts import (
    Account,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
)
from device_pool.schemas import AccountCreate, AccountResponse, LoginRequest, Token

router = APIRouter()


@router.post("/register", response_model=Token, summary="Register a user account")
async def register(
    payload: AccountCreate,
    account_service: AccountService = Depends(get_account_service),
    container: ApplicationContainer = Depends(get_container),
) -> Token:
    try:
        account = await account_service.create_account(
            AccountCreateInput(
                username=payload.username,
                name=payload.name,
                password=payload.password,
                email=payload.email,
            )
        )
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return Token(access_token=create_access_token(account.id, account.username, settings=container.settings))


@router.post("/login", response_model=Token, summary="Exchange credentials for a token")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    container: ApplicationContainer = Depends(get_container),
) -> Token:
    account = await account_service.authenticate(payload.username, payload.password)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    await account_service.set_last_login(account.id)
    return Token(access_token=create_access_token(account.id, account.username, settings=container.settings))


@router.get("/me", response_model=AccountResponse, summary="Current account")
async def me(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)
