"""
Password Reset API Routes

Form-encoded endpoints for issuing and redeeming password reset tokens.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from src.api.error import raise_for_error
from src.app.use_cases.password_reset import RedeemResetUseCase, RequestResetUseCase
from src.depends import get_redeem_reset_use_case, get_request_reset_use_case

router = APIRouter()


@router.post("/request-reset", status_code=status.HTTP_200_OK, response_class=PlainTextResponse)
async def request_reset(
    username: str = Form(...),
    redirect_to: str = Form("", alias="redirectTo"),
    use_case: RequestResetUseCase = Depends(get_request_reset_use_case),
):
    """
    Request Password Reset

    Issues a reset token valid for one hour and returns the reset link.
    Any earlier pending token for the user stops working.

    Raises:
        - 404 Not Found: Unknown username
        - 422 Unprocessable Entity: Missing username (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    result = await use_case.execute(username, redirect_to)

    if result.is_err():
        raise_for_error(result.error)

    return PlainTextResponse(f"Password reset link: {result.value.reset_link}")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_class=PlainTextResponse)
async def reset_password(
    token: str = Form(...),
    new_password: str = Form(..., alias="newPassword"),
    redirect_to: Optional[str] = Form(None, alias="redirectTo"),
    use_case: RedeemResetUseCase = Depends(get_redeem_reset_use_case),
):
    """
    Reset Password

    Redeems a reset token and sets the new password. Redirects to
    redirectTo when one is given.

    Raises:
        - 400 Bad Request: Unknown or expired token
        - 422 Unprocessable Entity: Missing token or newPassword (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    result = await use_case.execute(token, new_password, redirect_to)

    if result.is_err():
        raise_for_error(result.error)

    if result.value.redirect:
        return RedirectResponse(result.value.redirect_to, status_code=status.HTTP_302_FOUND)

    return PlainTextResponse("Password successfully reset!")
