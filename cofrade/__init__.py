"""Guía Cofrade: itinerarios de Semana Santa generados con Gemini."""

__version__ = "0.1.0"
