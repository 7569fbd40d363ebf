from enum import Enum

# Joins an access token-id and a user-id into the paired refresh token-id.
REFRESH_ID_SEPARATOR = "++"

SIGNING_ALGORITHM = "HS256"

DEFAULT_ACCESS_COOKIE = "access_token"
DEFAULT_REFRESH_COOKIE = "refresh_token"
DEFAULT_DISPLAY_NAME_COOKIE = "displayname"
DEFAULT_USER_ID_COOKIE = "userid"
REFRESH_TOKEN_HEADER = "X-Refresh-Token"


class TokenClass(Enum):
    ACCESS = "access"
    REFRESH = "refresh"
