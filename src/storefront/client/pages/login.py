"""Login page flow: collect credentials, sign in, then redirect."""

from __future__ import annotations

import logging

from storefront.client.api import StorefrontApi
from storefront.client.context import AuthContext, Navigator, Notifier

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/api/v1/auth/login"
FORGOT_PASSWORD_PATH = "/forgot-password"
GENERIC_ERROR = "Something went wrong"

SUCCESS_TOAST_OPTIONS = {
    "duration": 5000,
    "icon": "🙏",
    "style": {"background": "green", "color": "white"},
}


class LoginPage:
    """Form state and submit handling for the login screen."""

    title = "LOGIN FORM"
    fields = ("email", "password")

    def __init__(
        self,
        api: StorefrontApi,
        notifier: Notifier,
        navigator: Navigator,
        auth: AuthContext,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.navigator = navigator
        self.auth = auth
        self.email = ""
        self.password = ""

    def change(self, field: str, value: str) -> None:
        if field not in self.fields:
            raise ValueError(f"Unknown login field: {field}")
        setattr(self, field, value)

    def submit(self) -> bool:
        """Post the credentials; returns ``True`` when the user is signed in."""

        try:
            response = self.api.post(
                LOGIN_ENDPOINT, json={"email": self.email, "password": self.password}
            )
        except Exception:
            logger.exception("Login request failed")
            self.notifier.error(GENERIC_ERROR)
            return False

        if not response.success:
            self.notifier.error(response.message)
            return False

        self.notifier.success(response.message, **SUCCESS_TOAST_OPTIONS)
        self.auth.set(response.data.get("user"), response.data.get("token"))
        self.auth.persist(response.data)
        self.navigator.navigate(self.navigator.state or "/")
        return True

    def forgot_password(self) -> None:
        self.navigator.navigate(FORGOT_PASSWORD_PATH)


__all__ = ["LoginPage", "LOGIN_ENDPOINT", "GENERIC_ERROR", "SUCCESS_TOAST_OPTIONS"]
