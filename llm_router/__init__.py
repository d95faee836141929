"""LLM request router: one question, one provider, one normalized answer."""
