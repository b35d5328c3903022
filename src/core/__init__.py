"""Core: configuración, dominio, contratos y servicios (sin detalles de I/O)."""
