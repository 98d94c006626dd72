"""Core module - Motor de métricas calculadas.

Estructura:
- domain/      → Modelo de reporte y conversión numérica
- monitoring/  → Contadores de ingesta
"""
