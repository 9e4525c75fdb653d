"""Interface en ligne de commande FiscalFR."""
