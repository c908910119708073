"""Core: dominio, configuración, contratos y servicios del flujo de emisión."""
