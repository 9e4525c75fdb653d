"""FiscalFR - Calendrier des obligations fiscales d'une entite francaise."""

__version__ = "0.1.0"
