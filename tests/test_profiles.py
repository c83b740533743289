"""Tests for deployment profiles."""

import pytest

from rockdeploy.builder import BACKEND, FRONTEND
from rockdeploy.profiles import PROFILES, get_profile


class TestProfiles:
    """Tests for the shipped profiles."""

    def test_names(self):
        assert sorted(PROFILES) == ["backend", "build", "frontend", "full"]

    def test_build_only(self):
        """Test the build profile needs no server.json."""
        profile = get_profile("build")
        assert profile.builds == (FRONTEND, BACKEND)
        assert profile.uploads == ()
        assert profile.trigger is False
        assert profile.needs_config is False
        assert profile.required_fields == ()

    def test_frontend(self):
        profile = get_profile("frontend")
        assert profile.builds == (FRONTEND,)
        assert profile.uploads == ("frontend",)
        assert profile.frontend_only is True
        assert profile.required_fields == (
            "host", "username", "password", "port", "remotePathFrontend", "appUrl",
        )

    def test_backend(self):
        profile = get_profile("backend")
        assert profile.builds == (BACKEND,)
        assert profile.frontend_only is False
        assert profile.required_fields == (
            "host", "username", "password", "port", "remotePathBackend", "appUrl",
        )

    def test_full_uploads_backend_first(self):
        """Test the combined profile uploads backend before frontend."""
        profile = get_profile("full")
        assert profile.builds == (FRONTEND, BACKEND)
        assert profile.uploads == ("backend", "frontend")
        assert profile.required_fields == (
            "host", "username", "password", "port",
            "remotePathFrontend", "remotePathBackend", "appUrl",
        )

    def test_builds_project(self):
        assert get_profile("frontend").builds_project("frontend") is True
        assert get_profile("frontend").builds_project("backend") is False

    def test_unknown_profile(self):
        with pytest.raises(KeyError, match="Unknown deployment profile: staging"):
            get_profile("staging")
