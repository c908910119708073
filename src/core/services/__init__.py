"""Servicios del Core: resolución de config, recogida de parámetros y emisión."""
