"""
Folio Server - Translations

One JSON file per locale mapping message keys to templates.
"""
