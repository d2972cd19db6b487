"""Solana Actions request and response contracts."""

from typing import Optional

from pydantic import BaseModel, Field


class LinkedAction(BaseModel):
    """Follow-up action offered to the client."""

    label: str = Field(..., description="Button label")
    href: str = Field(..., description="Endpoint the client POSTs to")


class ActionLinks(BaseModel):
    actions: list[LinkedAction] = Field(default_factory=list)


class ActionGetResponse(BaseModel):
    """Discovery payload returned by GET."""

    icon: str = Field(..., description="Icon URL")
    label: str = Field(..., description="Default button label")
    title: str = Field(..., description="Action title")
    description: str = Field(..., description="Human-readable game state")
    links: ActionLinks = Field(default_factory=ActionLinks)


class ActionPostRequest(BaseModel):
    """Body posted by the client's wallet."""

    account: Optional[str] = Field(None, description="Base58 public key of the caller")


class ActionPostResponse(BaseModel):
    """Unsigned transaction for the wallet to sign."""

    transaction: str = Field(..., description="Base64 serialized unsigned transaction")
    message: Optional[str] = Field(None, description="Message shown to the user")


class ErrorResponse(BaseModel):
    """Error envelope."""

    error: str
