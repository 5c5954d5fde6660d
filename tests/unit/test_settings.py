"""Tests for construct settings validation."""

import pytest
from pydantic import ValidationError

from nextjs_cdn.models import DistributionSettings


def test_defaults():
    settings = DistributionSettings()

    assert settings.base_path is None
    assert settings.stack_prefix == "Nextjs"
    assert settings.edge_stack_id == "Nextjs-edge"


def test_empty_base_path_means_none():
    assert DistributionSettings(base_path="").base_path is None


def test_edge_stack_id_includes_stage():
    settings = DistributionSettings(stack_prefix="Shop", stage_name="prod")

    assert settings.edge_stack_id == "Shop-prod-edge"


@pytest.mark.parametrize("base_path", ["/docs", "/a/b", "/my-site_v2"])
def test_valid_base_paths(base_path):
    assert DistributionSettings(base_path=base_path).base_path == base_path


@pytest.mark.parametrize("base_path", ["docs", "/docs/", "/", "/my docs", "/ü", "/docs\n"])
def test_invalid_base_paths(base_path):
    with pytest.raises(ValidationError):
        DistributionSettings(base_path=base_path)
