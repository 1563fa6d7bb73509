"""Athena client construction.

The profile name comes from the environment; credentials are resolved lazily by
boto3 from the shared config (including assumed-role profiles). The client is
built explicitly and passed to the connector rather than held at module level.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from typing import Any

import boto3

from athena_connector.errors import MissingProfileError

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "AUX_PROFILE"
DEFAULT_REGION = "us-east-1"

SessionFactory = Callable[..., Any]


def resolve_profile(environ: Mapping[str, str] | None = None) -> str:
    """Return the credential profile name from the environment.

    Raises:
        MissingProfileError: If the variable is unset or empty.
    """
    env = os.environ if environ is None else environ
    profile = env.get(PROFILE_ENV_VAR, "").strip()
    if not profile:
        raise MissingProfileError(PROFILE_ENV_VAR)
    return profile


def create_athena_client(
    profile: str,
    *,
    region: str = DEFAULT_REGION,
    session_factory: SessionFactory = boto3.Session,
) -> Any:
    """Build an Athena client bound to ``region`` using the named profile."""
    session = session_factory(profile_name=profile, region_name=region)
    logger.debug("Created Athena client for profile %s in %s", profile, region)
    return session.client("athena")


def client_from_environment(
    environ: Mapping[str, str] | None = None,
    *,
    region: str = DEFAULT_REGION,
    session_factory: SessionFactory = boto3.Session,
) -> Any:
    """Resolve the profile from the environment and build the client."""
    profile = resolve_profile(environ)
    return create_athena_client(profile, region=region, session_factory=session_factory)
