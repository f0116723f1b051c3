import logging
from unittest.mock import MagicMock, patch

import pytest
from postgrest.exceptions import APIError

from modules.auth.models import Profile, ShadowSession, UserRole
from modules.auth.profiles import ProfileResolver, fallback_profile, profile_from_shadow


class TestProfileFromShadow:
    def test_maps_fields(self):
        record = ShadowSession(id="e1", full_name="Ana", role=UserRole.OPERATOR)

        profile = profile_from_shadow(record)

        assert profile == Profile(id="e1", email=None, full_name="Ana", role=UserRole.OPERATOR)


class TestFallbackProfile:
    def test_defaults(self):
        profile = fallback_profile("u1")

        assert profile.id == "u1"
        assert profile.full_name == "Usuario"
        assert profile.role == UserRole.OWNER
        assert profile.email is None

    def test_uses_metadata(self):
        profile = fallback_profile(
            "u1", {"full_name": "Olga", "role": "superadmin", "email": "olga@example.com"}
        )

        assert profile.full_name == "Olga"
        assert profile.role == UserRole.SUPERADMIN
        assert profile.email == "olga@example.com"

    def test_unknown_role_uses_default(self, caplog):
        with caplog.at_level(logging.WARNING):
            profile = fallback_profile("u1", {"role": "janitor"})

        assert profile.role == UserRole.OWNER
        assert "janitor" in caplog.text

    def test_default_role_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            fallback_profile("u1", {})

        assert "defaulting to 'owner'" in caplog.text

    @pytest.mark.parametrize(
        "metadata",
        [
            {"full_name": 123, "email": 456, "role": 7},
            {"full_name": ["Olga"], "email": {"a": 1}, "role": ["owner"]},
            {"full_name": "   ", "email": "", "role": None},
        ],
    )
    def test_malformed_metadata_uses_defaults(self, metadata):
        """Metadata values of the wrong type count as absent."""
        profile = fallback_profile("u1", metadata)

        assert profile.full_name == "Usuario"
        assert profile.email is None
        assert profile.role == UserRole.OWNER

    def test_explicit_defaults(self):
        profile = fallback_profile("u1", default_role=UserRole.AUDITOR, default_full_name="Anon")

        assert profile.role == UserRole.AUDITOR
        assert profile.full_name == "Anon"


class TestProfileResolver:
    @pytest.mark.asyncio
    async def test_returns_stored_profile(self, resolver, owner_profile):
        profile = await resolver.resolve_profile("owner-123", {"role": "manager"})

        assert profile == owner_profile

    @pytest.mark.asyncio
    async def test_missing_row_falls_back(self, resolver):
        profile = await resolver.resolve_profile("ghost", {"full_name": "Gus"})

        assert profile.id == "ghost"
        assert profile.full_name == "Gus"
        assert profile.role == UserRole.OWNER

    @pytest.mark.asyncio
    async def test_query_error_falls_back(self, resolver, profiles):
        profiles.error = APIError({"message": "bad request", "code": "PGRST100"})

        profile = await resolver.resolve_profile("owner-123", {"role": "auditor"})

        assert profile.role == UserRole.AUDITOR

    @pytest.mark.asyncio
    async def test_transport_error_yields_none(self, resolver, profiles):
        profiles.error = ConnectionError("network down")

        assert await resolver.resolve_profile("owner-123") is None

    @pytest.mark.asyncio
    async def test_never_raises(self):
        repository = MagicMock()
        repository.get_profile.side_effect = RuntimeError("boom")

        assert await ProfileResolver(repository).resolve_profile("u1") is None

    @pytest.mark.asyncio
    async def test_malformed_metadata_never_raises(self, resolver):
        profile = await resolver.resolve_profile("ghost", {"full_name": 123, "email": 456})

        assert profile.id == "ghost"
        assert profile.full_name == "Usuario"
        assert profile.email is None

    @pytest.mark.asyncio
    async def test_fallback_failure_yields_none(self, resolver):
        with patch("modules.auth.profiles.fallback_profile", side_effect=RuntimeError("boom")):
            assert await resolver.resolve_profile("ghost") is None
