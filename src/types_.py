# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Types of the Jenkins credentials managed by the provider."""

import dataclasses
import typing

# The global (unscoped) credentials domain of the system store
DEFAULT_DOMAIN = "_"
DEFAULT_SCOPE = "GLOBAL"
SCOPES = ("GLOBAL", "SYSTEM")


@dataclasses.dataclass(frozen=True)
class UsernamePasswordCredential:
    """A username with password credential.

    Attributes:
        jenkins_class: The credentials plugin implementation class.
        scope: The credential scope.
        id: The unique credential identifier.
        description: The credential description.
        username: The username.
        password: The password.
    """

    jenkins_class: typing.ClassVar[str] = (
        "com.cloudbees.plugins.credentials.impl.UsernamePasswordCredentialsImpl"
    )

    scope: str
    id: str
    description: str
    username: str
    password: str = dataclasses.field(repr=False)


@dataclasses.dataclass(frozen=True)
class StringCredential:
    """A secret text credential.

    Attributes:
        jenkins_class: The plain credentials plugin implementation class.
        scope: The credential scope.
        id: The unique credential identifier.
        description: The credential description.
        secret: The secret text.
    """

    jenkins_class: typing.ClassVar[str] = (
        "org.jenkinsci.plugins.plaincredentials.impl.StringCredentialsImpl"
    )

    scope: str
    id: str
    description: str
    secret: str = dataclasses.field(repr=False)


Credential = typing.Union[UsernamePasswordCredential, StringCredential]
