from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ---------- Inputs ----------

class LoginIn(BaseModel):
    # champs absents = identifiants invalides (401), pas une erreur de validation
    user_email: str = Field("", examples=["jane@mail.com"])
    user_password: str = Field("", examples=["s3cretpassword"])

    model_config = _camel


# ---------- Outputs ----------

class UserOut(BaseModel):
    user_id: str
    user_name: str
    user_email: str

    model_config = _camel

class TokenPairOut(BaseModel):
    access_token: str
    refresh_token: str

    model_config = _camel

class LoginOut(TokenPairOut):
    logged_in_user: UserOut

class MessageOut(BaseModel):
    message: str
