"""Servicios del Core (orquestación sobre los contratos de `core.interfaces`)."""
