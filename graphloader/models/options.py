"""
Load option models.

These models describe the configuration a caller hands to the
entry points. Both snake_case field names and the camelCase keys
used by converted-model tooling (fromTFHub, requestInit, onProgress)
are accepted.
"""

from typing import Callable, Dict, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from graphloader.config import settings

# Observer invoked with the completed fraction of a load, in [0, 1]
ProgressCallback = Callable[[float], None]


class RequestOptions(BaseModel):
    """
    Transport configuration passed verbatim to whichever backend
    performs the fetch.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra HTTP headers sent with every request",
    )
    auth: Optional[Tuple[str, str]] = Field(
        default=None,
        description="Basic auth credentials as (username, password)",
    )
    credentials: Optional[Literal["omit", "same-origin", "include"]] = Field(
        default=None,
        description="Whether credentials are sent; 'omit' suppresses auth",
    )
    timeout_s: Optional[float] = Field(
        default=None,
        description="Per-request timeout in seconds. Defaults to config.",
        gt=0.0,
        validation_alias=AliasChoices("timeout_s", "timeout"),
    )

    @property
    def effective_timeout(self) -> float:
        """Timeout to hand to the transport."""
        return self.timeout_s if self.timeout_s is not None else settings.REQUEST_TIMEOUT_S

    @property
    def effective_auth(self) -> Optional[Tuple[str, str]]:
        """Basic auth to send, unless credentials are omitted."""
        return None if self.credentials == "omit" else self.auth


class LoadOptions(BaseModel):
    """
    Options recognized by `load_graph_model`.

    Example:
        options = LoadOptions(from_tfhub=True)
        options = LoadOptions.model_validate({"fromTFHub": True})
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    from_tfhub: bool = Field(
        default=False,
        description="Treat the locator as a TF-Hub module URL",
        validation_alias=AliasChoices("from_tfhub", "fromTFHub"),
    )
    request_options: Optional[RequestOptions] = Field(
        default=None,
        description="Transport configuration forwarded to the backend",
        validation_alias=AliasChoices("request_options", "requestOptions", "requestInit"),
    )
    progress_callback: Optional[ProgressCallback] = Field(
        default=None,
        description="Called with the completed fraction while the load runs",
        validation_alias=AliasChoices("progress_callback", "onProgress"),
    )
