"""Shared fixtures for JIRA authorization tests."""

from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from jira_authorization import (
    Application,
    InMemoryAuthorizationRepository,
    IntegrationProperties,
    IntegrationSettings,
)
from jira_authorization.models.authorization import AppAuthorizationModel

APP_ID = "jira"
APP_TYPE = "jiraWebHookIntegration"
BRIDGE_URL = "https://bridge.example.com"
JIRA_URL = "https://jira.example.com"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """RSA key shared by the whole session (generation is slow)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return (
        rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


@pytest.fixture
def certs_dir(tmp_path: Path, private_key_pem: str, public_key_pem: str) -> Path:
    """Certificate directory provisioned with the default key filenames."""
    directory = tmp_path / "certs"
    directory.mkdir()
    (directory / f"{APP_ID}_app.pkcs8").write_text(private_key_pem)
    (directory / f"{APP_ID}_app_pub.pem").write_text(public_key_pem)
    return directory


def make_properties(
    certs_dir: Path | None,
    authorization: AppAuthorizationModel | None = None,
) -> IntegrationProperties:
    """Build properties with a single JIRA application."""
    return IntegrationProperties(
        integration_bridge_url=BRIDGE_URL,
        certs_directory=certs_dir,
        applications={
            APP_TYPE: Application(
                id=APP_ID,
                authorization=authorization or AppAuthorizationModel(consumer_key="bridge"),
            )
        },
    )


@pytest.fixture
def properties(certs_dir: Path) -> IntegrationProperties:
    return make_properties(certs_dir)


@pytest.fixture
def settings() -> IntegrationSettings:
    return IntegrationSettings(type=APP_TYPE, configuration_id="42")


@pytest.fixture
def repository() -> InMemoryAuthorizationRepository:
    return InMemoryAuthorizationRepository()
