"""
Pydantic Credentials Model

Long-lived caller credentials, supplied once and passed explicitly into
every signing and verification call.
"""
from pydantic import BaseModel, Field, SecretStr


class Credentials(BaseModel):
    """
    API key, HMAC shared secret and hash token password.

    Notes:
    - Frozen: credentials never change after construction
    - shared_secret and password are SecretStr so repr() and logging
      print '**********' instead of the value
    """
    api_key: str = Field(description="Bearer token sent in the Authorization header")
    shared_secret: SecretStr = Field(description="HMAC-SHA256 key")
    password: SecretStr = Field(description="Concatenated with the salt to form the hash token")

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    @classmethod
    def from_settings(cls, settings) -> "Credentials":
        """Build credentials from a Settings instance."""
        return cls(
            api_key=settings.api_key,
            shared_secret=settings.secret_key,
            password=settings.password,
        )
