"""
Folio Server - Routes Package

One APIRouter per module, included by server.CreateApp().
"""
