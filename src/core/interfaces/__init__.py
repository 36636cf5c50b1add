"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del transporte HTTP que implementa el adaptador httpx.
- El Core depende de la abstracción, no de httpx.
"""
