"""Application layer – SqlJob model, validators and admission control."""
