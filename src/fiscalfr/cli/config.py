"""Sous-commandes CLI de la configuration fiscale."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from fiscalfr.stockage.config import mettre_a_jour_config, obtenir_ou_creer_config

config_app = typer.Typer(no_args_is_help=True)
console = Console()


def lire_montant(montant: str) -> Decimal:
    """Convertit un montant saisi en Decimal fini, ou quitte avec le code 1."""
    try:
        valeur = Decimal(montant)
    except InvalidOperation:
        valeur = None
    if valeur is None or not valeur.is_finite():
        console.print(f"[red]Erreur: montant invalide '{montant}'[/red]")
        raise typer.Exit(1)
    return valeur


def _mettre_a_jour(**changements: object) -> None:
    from fiscalfr.cli.app import get_config_path

    try:
        mettre_a_jour_config(get_config_path(), **changements)
    except ValidationError as e:
        console.print(f"[red]Configuration invalide:[/red] {e}")
        raise typer.Exit(1)


@config_app.command(name="afficher")
def afficher() -> None:
    """Afficher la configuration fiscale (creee par defaut si absente)."""
    from fiscalfr.cli.app import get_config_path

    config = obtenir_ou_creer_config(get_config_path())

    tableau = Table(title="Configuration fiscale", show_header=True)
    tableau.add_column("Parametre", style="cyan")
    tableau.add_column("Valeur")

    tableau.add_row("Date de creation", config.date_creation.isoformat())
    tableau.add_row("Premiere cloture", config.date_premiere_cloture.isoformat())
    tableau.add_row("Cloture", f"{config.jour_cloture:02d}/{config.mois_cloture:02d}")
    tableau.add_row("Regime TVA", config.regime_tva.value)
    tableau.add_row("URSSAF", "active" if config.urssaf_active else "inactive")
    for exercice, montant in sorted(config.tva_par_exercice.items()):
        tableau.add_row(f"TVA nette {exercice}", f"{montant:,.2f} EUR")
    cfe = config.montant_cfe_estime
    tableau.add_row("CFE estimee", f"{cfe:,.2f} EUR" if cfe is not None else "-")

    console.print(tableau)


@config_app.command(name="tva")
def tva(
    exercice: int = typer.Argument(..., help="Exercice fiscal (ex: 2026)"),
    montant: str = typer.Argument(..., help="TVA nette de l'exercice"),
) -> None:
    """Renseigner la TVA nette d'un exercice (base des acomptes suivants)."""
    _mettre_a_jour(tva_par_exercice={exercice: lire_montant(montant)})
    console.print(f"[green]TVA nette {exercice} enregistree: {montant}[/green]")


@config_app.command(name="cfe")
def cfe(
    montant: str = typer.Argument(..., help="Montant CFE estime"),
) -> None:
    """Renseigner le montant estime de la CFE."""
    _mettre_a_jour(montant_cfe_estime=lire_montant(montant))
    console.print(f"[green]Montant CFE estime enregistre: {montant}[/green]")
