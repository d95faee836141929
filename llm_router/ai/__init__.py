"""AI package: chat provider dispatch, citation extraction and image generation.

Import directly from submodules (e.g. ``from llm_router.ai.dispatcher import ProviderDispatcher``).
"""
