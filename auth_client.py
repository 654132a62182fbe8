import httpx

from logger import get_logger
from schema import AuthSession
from settings import settings

logger = get_logger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"

MIN_PASSWORD_LENGTH = 6
SHORT_PASSWORD_MESSAGE = "Password must be at least 6 characters long."

SIGN_UP = "sign_up"
SIGN_IN = "sign_in"

# provider error codes -> text shown to the user
AUTH_ERROR_MESSAGES = {
    "INVALID_EMAIL": "Invalid email address.",
    "MISSING_EMAIL": "Invalid email address.",
    "WEAK_PASSWORD": "Password is too weak. Please choose a stronger password.",
    "EMAIL_EXISTS": "An account already exists with this email address.",
    "INVALID_PASSWORD": "Incorrect password.",
    "EMAIL_NOT_FOUND": "No user found with this email.",
    # returned instead of the two above when email enumeration protection is on
    "INVALID_LOGIN_CREDENTIALS": "Incorrect email or password.",
}

DEFAULT_AUTH_ERRORS = {
    SIGN_UP: "Failed to sign up. Please check your details and try again.",
    SIGN_IN: "Failed to sign in. Please check your credentials and try again.",
}


class AuthError(Exception):

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


def map_auth_error(code: str | None, action: str) -> str:
    # the API appends details after a colon, e.g. "WEAK_PASSWORD : Password should be ..."
    normalized = (code or "").split(":")[0].strip()
    return AUTH_ERROR_MESSAGES.get(normalized, DEFAULT_AUTH_ERRORS[action])


class AuthClient:
    """Email/password accounts through the Firebase Identity Toolkit REST API."""

    def __init__(self, api_key: str | None = None, http_client: httpx.Client | None = None):
        if api_key is None and settings.FIREBASE_API_KEY is not None:
            api_key = settings.FIREBASE_API_KEY.get_secret_value()
        self.api_key = api_key
        self.http_client = http_client if http_client is not None else httpx.Client(base_url = IDENTITY_TOOLKIT_URL)

    def sign_up(self, email: str, password: str) -> AuthSession:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(SHORT_PASSWORD_MESSAGE, code = "PASSWORD_TOO_SHORT")
        return self._post("accounts:signUp", email, password, SIGN_UP)

    def sign_in(self, email: str, password: str) -> AuthSession:
        return self._post("accounts:signInWithPassword", email, password, SIGN_IN)

    def _post(self, endpoint: str, email: str, password: str, action: str) -> AuthSession:
        if not self.api_key:
            raise AuthError(DEFAULT_AUTH_ERRORS[action], code = "MISSING_API_KEY")

        try:
            response = self.http_client.post(
                f"/{endpoint}",
                params = {"key": self.api_key},
                json = {"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s", action, exc)
            raise AuthError(DEFAULT_AUTH_ERRORS[action]) from exc

        if response.is_error:
            code = self._error_code(response)
            logger.warning("%s rejected for %s: %s", action, email, code)
            raise AuthError(map_auth_error(code, action), code = code)

        data = response.json()
        return AuthSession(
            id_token = data["idToken"],
            refresh_token = data["refreshToken"],
            email = data.get("email", email),
            local_id = data["localId"],
            expires_in = int(data.get("expiresIn", 3600)),
        )

    @staticmethod
    def _error_code(response: httpx.Response) -> str | None:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return None
