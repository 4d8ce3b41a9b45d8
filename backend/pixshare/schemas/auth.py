from pixshare.schemas.base import CamelModel


class Principal(CamelModel):
    """Identity attached to a request, rebuilt from the credential each time."""

    user_id: str
    email: str
    name: str = ""
    picture: str = ""


class ProfileResponse(CamelModel):
    user: Principal


class VerifyResponse(CamelModel):
    valid: bool = True
    user: Principal


class MessageResponse(CamelModel):
    message: str
