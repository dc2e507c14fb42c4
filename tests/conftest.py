import pytest

from sample_users_mcp.catalog import build_sample_registry
from sample_users_mcp.core.tools import ToolDispatcher, ToolRegistry
from sample_users_mcp.data import Dataset


@pytest.fixture
def dataset() -> Dataset:
    return Dataset.sample()


@pytest.fixture
def sample_registry(dataset: Dataset) -> ToolRegistry:
    return build_sample_registry(dataset)


@pytest.fixture
def dispatcher(sample_registry: ToolRegistry) -> ToolDispatcher:
    return ToolDispatcher(sample_registry, tool_timeout=5.0)
