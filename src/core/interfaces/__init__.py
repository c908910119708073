"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones
  (ledger, servicio de pinning) y los tests usan stubs en memoria.
"""
