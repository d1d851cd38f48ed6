from uuid import UUID

from domains._shared.security import TokenPayload, build_access_token_dependency
from domains.carpark.core.config import get_settings

_DISABLED_TOKEN = TokenPayload(
    user_id=UUID("00000000-0000-0000-0000-000000000000"),
    username="local",
)

if get_settings().auth_disabled:

    async def access_token_dependency() -> TokenPayload:
        return _DISABLED_TOKEN

else:
    access_token_dependency = build_access_token_dependency(get_settings)

__all__ = ["access_token_dependency", "TokenPayload"]
