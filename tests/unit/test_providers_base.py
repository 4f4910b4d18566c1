# tests/unit/test_providers_base.py
import pytest
from code_critic.platforms.base import CodeHost
from code_critic.providers.base import LLMProvider
from code_critic.store.base import ReviewStore


@pytest.mark.unit
def test_provider_is_abstract():
    with pytest.raises(TypeError):
        LLMProvider()


@pytest.mark.unit
def test_code_host_is_abstract():
    with pytest.raises(TypeError):
        CodeHost()


@pytest.mark.unit
def test_review_store_is_abstract():
    with pytest.raises(TypeError):
        ReviewStore()
