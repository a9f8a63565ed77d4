# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Jenkins credentials provider states."""

import dataclasses
import logging
import os
import typing

from pydantic import BaseModel, Field, HttpUrl, ValidationError

from types_ import DEFAULT_DOMAIN, DEFAULT_SCOPE

logger = logging.getLogger(__name__)


class StateBaseError(Exception):
    """Represents an error with the provider or resource state."""


class ProviderConfigInvalidError(StateBaseError):
    """Exception raised when the provider configuration is found to be invalid.

    Attributes:
        msg: Explanation of the error.
    """

    def __init__(self, msg: str):
        """Initialize a new instance of the ProviderConfigInvalidError exception.

        Args:
            msg: Explanation of the error.
        """
        super().__init__(msg)
        self.msg = msg


class ResourceDataInvalidError(StateBaseError):
    """Exception raised when the declared resource data is found to be invalid.

    Attributes:
        msg: Explanation of the error.
    """

    def __init__(self, msg: str):
        """Initialize a new instance of the ResourceDataInvalidError exception.

        Args:
            msg: Explanation of the error.
        """
        super().__init__(msg)
        self.msg = msg


class ProviderConfig(BaseModel):
    """Configuration for accessing the Jenkins credentials store.

    Attributes:
        server_url: The Jenkins server URL.
        username: The Jenkins account username.
        password_or_token: The Jenkins API token or account password.
        domain: The credentials domain to manage credentials in.
        scope: The scope given to created credentials.
        timeout: The HTTP request timeout in seconds.
        ssl_verify: Whether to verify the server TLS certificate.
    """

    server_url: HttpUrl
    username: str = Field(..., min_length=1)
    password_or_token: str = Field(..., min_length=1, repr=False)
    domain: str = Field(DEFAULT_DOMAIN, min_length=1)
    scope: typing.Literal["GLOBAL", "SYSTEM"] = DEFAULT_SCOPE
    timeout: int = Field(60, gt=0)
    ssl_verify: bool = True

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Instantiate ProviderConfig from the environment.

        Returns:
            The provider configuration.

        Raises:
            ProviderConfigInvalidError: if the configuration is missing or invalid.
        """
        values = {
            "server_url": os.environ.get("JENKINS_URL"),
            "username": os.environ.get("JENKINS_USERNAME"),
            "password_or_token": os.environ.get("JENKINS_PASSWORD"),
            "domain": os.environ.get("JENKINS_CREDENTIALS_DOMAIN"),
            "scope": os.environ.get("JENKINS_CREDENTIALS_SCOPE"),
            "timeout": os.environ.get("JENKINS_TIMEOUT"),
            "ssl_verify": os.environ.get("JENKINS_SSL_VERIFY"),
        }
        try:
            # Unset optional values fall back to the field defaults.
            return cls(**{key: value for key, value in values.items() if value is not None})
        except ValidationError as exc:
            fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
            logger.error("Invalid provider configuration, %s", fields)
            raise ProviderConfigInvalidError(
                f"Invalid provider configuration: {fields}."
            ) from exc


@dataclasses.dataclass
class ResourceData:
    """The declared state of a resource as supplied by the orchestration host.

    Attributes:
        fields: The declared field values.
        id: The resource identifier, empty when the resource has no remote counterpart.
    """

    fields: dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    id: str = ""

    def get(self, key: str, default: typing.Any = None) -> typing.Any:
        """Get a declared field value.

        Args:
            key: The field name.
            default: The value returned if the field is not set.

        Returns:
            The field value.
        """
        return self.fields.get(key, default)

    def set(self, key: str, value: typing.Any) -> None:
        """Set a field value.

        Args:
            key: The field name.
            value: The field value.
        """
        self.fields[key] = value

    def set_id(self, resource_id: str) -> None:
        """Set the resource identifier, an empty identifier drops the resource from state.

        Args:
            resource_id: The resource identifier.
        """
        self.id = resource_id


class UsernamePasswordSpec(BaseModel):
    """Declared fields of a username with password credential.

    Attributes:
        username: The username.
        password: The password.
        description: The optional credential description.
        template: Configuration template, accepted but unused.
        parameters: Template parameters, accepted but unused.
        hash: Template hash, accepted but unused.
    """

    username: str = Field(..., min_length=1, description="The username of the credential.")
    password: str = Field(
        ..., min_length=1, repr=False, description="The password of the credential."
    )
    description: str = Field("", description="The (optional) description of the credential.")
    template: typing.Optional[str] = Field(None, description="Configuration file template.")
    parameters: typing.Optional[dict[str, str]] = Field(
        None, description="The set of parameters to be set in the template."
    )
    hash: typing.Optional[str] = Field(
        None, description="Tracks modifications to the template when not embedded."
    )

    @classmethod
    def from_resource_data(cls, data: ResourceData) -> "UsernamePasswordSpec":
        """Instantiate UsernamePasswordSpec from the declared resource data.

        Args:
            data: The declared resource data.

        Returns:
            The validated declared fields.

        Raises:
            ResourceDataInvalidError: if the declared fields are invalid.
        """
        return _validate(cls, data)


class SecretSpec(BaseModel):
    """Declared fields of a secret text credential.

    Attributes:
        secret: The secret text.
        description: The optional credential description.
    """

    secret: str = Field(..., min_length=1, repr=False, description="The secret text.")
    description: str = Field("", description="The (optional) description of the credential.")

    @classmethod
    def from_resource_data(cls, data: ResourceData) -> "SecretSpec":
        """Instantiate SecretSpec from the declared resource data.

        Args:
            data: The declared resource data.

        Returns:
            The validated declared fields.

        Raises:
            ResourceDataInvalidError: if the declared fields are invalid.
        """
        return _validate(cls, data)


SpecT = typing.TypeVar("SpecT", UsernamePasswordSpec, SecretSpec)


def _validate(spec_type: type[SpecT], data: ResourceData) -> SpecT:
    """Validate declared resource data against a credential schema.

    Args:
        spec_type: The credential schema.
        data: The declared resource data.

    Returns:
        The validated declared fields.

    Raises:
        ResourceDataInvalidError: if the declared fields are invalid.
    """
    # Unset optional fields are stored by hosts as None.
    declared = {key: value for key, value in data.fields.items() if value is not None}
    try:
        return spec_type(**declared)
    except ValidationError as exc:
        # Only field names are reported, values may be secrets.
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
        logger.error("Invalid %s resource data, %s", spec_type.__name__, fields)
        raise ResourceDataInvalidError(f"Invalid resource data: {fields}.") from exc
