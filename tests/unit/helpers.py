# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Helper functions used to unit test the Jenkins credentials provider."""

import textwrap

import requests

from types_ import StringCredential, UsernamePasswordCredential

BASE_URL = "http://jenkins.local:8080"
DOMAIN_URL = f"{BASE_URL}/credentials/store/system/domain/_"


def make_response(status_code: int = 200, text: str = "") -> requests.Response:
    """Build a response as returned by the Jenkins requester.

    Args:
        status_code: Status code of the returned response.
        text: Body of the returned response.

    Returns:
        The response.
    """
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    # pylint: disable=protected-access
    response._content = text.encode("utf-8")
    return response


def username_config_xml(credential_id: str, username: str, description: str = "") -> str:
    """Render a username with password credential config.xml as served by Jenkins.

    Args:
        credential_id: The credential identifier.
        username: The credential username.
        description: The credential description.

    Returns:
        The config.xml contents with the password redacted.
    """
    return textwrap.dedent(
        f"""\
        <{UsernamePasswordCredential.jenkins_class} plugin="credentials@1337.v60b_d7b_c7b_c9f">
          <scope>GLOBAL</scope>
          <id>{credential_id}</id>
          <description>{description}</description>
          <username>{username}</username>
          <password>
            <secret-redacted/>
          </password>
          <usernameSecret>false</usernameSecret>
        </{UsernamePasswordCredential.jenkins_class}>
        """
    )


def string_config_xml(credential_id: str, description: str = "") -> str:
    """Render a secret text credential config.xml as served by Jenkins.

    Args:
        credential_id: The credential identifier.
        description: The credential description.

    Returns:
        The config.xml contents with the secret redacted.
    """
    return textwrap.dedent(
        f"""\
        <{StringCredential.jenkins_class} plugin="plain-credentials@183.va_de8f1dd5a_2b_">
          <scope>GLOBAL</scope>
          <id>{credential_id}</id>
          <description>{description}</description>
          <secret>
            <secret-redacted/>
          </secret>
        </{StringCredential.jenkins_class}>
        """
    )
