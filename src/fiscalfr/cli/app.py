"""Application CLI principale FiscalFR."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

import fiscalfr
from fiscalfr.stockage.config import CHEMIN_CONFIG_DEFAUT
from fiscalfr.stockage.surcharges import CHEMIN_SURCHARGES_DEFAUT

app = typer.Typer(
    name="fiscal",
    help="FiscalFR - Calendrier des obligations fiscales (TVA, liasse, CFE)",
    no_args_is_help=True,
)

console = Console()

# Chemins choisis par les options globales, lus par les sous-commandes
_chemins: dict[str, Path] = {
    "config": CHEMIN_CONFIG_DEFAUT,
    "surcharges": CHEMIN_SURCHARGES_DEFAUT,
}


def get_config_path() -> Path:
    """Retourne le chemin du fichier de configuration fiscale."""
    return _chemins["config"]


def get_surcharges_path() -> Path:
    """Retourne le chemin du registre de surcharges."""
    return _chemins["surcharges"]


def _afficher_version(demande: bool) -> None:
    if demande:
        console.print(f"FiscalFR {fiscalfr.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Path = typer.Option(
        CHEMIN_CONFIG_DEFAUT,
        "--config",
        "-c",
        help="Configuration fiscale de l'entite (YAML)",
    ),
    surcharges: Path = typer.Option(
        CHEMIN_SURCHARGES_DEFAUT,
        "--surcharges",
        "-s",
        help="Statuts et montants saisis par l'utilisateur (YAML)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Afficher la version",
        callback=_afficher_version,
        is_eager=True,
    ),
) -> None:
    """Obligations fiscales d'une entite au regime reel simplifie."""
    _chemins["config"] = config
    _chemins["surcharges"] = surcharges


from fiscalfr.cli.config import config_app  # noqa: E402
from fiscalfr.cli.obligations import obligations, plage, rappels, statut  # noqa: E402

app.add_typer(config_app, name="config", help="Afficher ou modifier la configuration fiscale")
app.command(name="obligations", help="Obligations d'une annee civile")(obligations)
app.command(name="plage", help="Obligations sur plusieurs annees")(plage)
app.command(name="statut", help="Enregistrer le statut d'une obligation")(statut)
app.command(name="rappels", help="Rappels des obligations approchantes")(rappels)
