"""Sous-commandes CLI des obligations fiscales (annee, plage, statut, rappels)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from fiscalfr.cli.config import lire_montant
from fiscalfr.echeances.calendrier import formater_rappels_cli, obtenir_alertes
from fiscalfr.echeances import generateur
from fiscalfr.echeances.modeles import ResultatObligations, StatutObligation
from fiscalfr.stockage.service import obtenir_obligations_annee, obtenir_obligations_plage
from fiscalfr.stockage.surcharges import RegistreSurcharges

console = Console()


def _statut_style(statut: StatutObligation) -> str:
    """Retourne le style Rich pour un statut d'obligation."""
    styles = {
        StatutObligation.PENDING: "yellow",
        StatutObligation.PAID: "green",
        StatutObligation.OVERDUE: "red bold",
    }
    return styles.get(statut, "")


def _formater_montant(montant: Optional[Decimal]) -> str:
    """Formate un montant en EUR avec 2 decimales, ou un tiret si inconnu."""
    if montant is None:
        return "-"
    return f"{montant:,.2f} EUR"


def _afficher_resultat(resultat: ResultatObligations) -> None:
    """Affiche le tableau des obligations d'une annee et ses avertissements."""
    if not resultat.obligations:
        console.print(f"[yellow]Aucune obligation en {resultat.annee}.[/yellow]")
    else:
        tableau = Table(title=f"Obligations fiscales {resultat.annee}", show_header=True)
        tableau.add_column("Echeance", style="cyan")
        tableau.add_column("Cle", style="dim")
        tableau.add_column("Libelle", min_width=40)
        tableau.add_column("Exercice", justify="right")
        tableau.add_column("Montant", justify="right")
        tableau.add_column("Statut")

        for o in resultat.obligations:
            style = _statut_style(o.statut)
            tableau.add_row(
                o.date_echeance.isoformat(),
                o.cle,
                o.libelle,
                str(o.exercice_fiscal),
                _formater_montant(o.montant),
                f"[{style}]{o.statut.value}[/{style}]",
            )
        console.print(tableau)

    for avertissement in resultat.avertissements:
        console.print(f"[yellow]Avertissement:[/yellow] {avertissement}")


def obligations(
    annee: Optional[int] = typer.Option(
        None,
        "--annee",
        "-a",
        help="Annee civile (defaut: annee courante)",
    ),
) -> None:
    """Afficher les obligations fiscales d'une annee civile."""
    from fiscalfr.cli.app import get_config_path, get_surcharges_path

    if annee is None:
        annee = generateur.date_du_jour().year

    resultat = obtenir_obligations_annee(annee, get_config_path(), get_surcharges_path())
    _afficher_resultat(resultat)


def plage(
    de: int = typer.Argument(..., help="Premiere annee (incluse)"),
    a: int = typer.Argument(..., help="Derniere annee (incluse)"),
) -> None:
    """Afficher les obligations fiscales de plusieurs annees consecutives."""
    from fiscalfr.cli.app import get_config_path, get_surcharges_path

    try:
        resultats = obtenir_obligations_plage(de, a, get_config_path(), get_surcharges_path())
    except ValueError as e:
        console.print(f"[red]Erreur:[/red] {e}")
        raise typer.Exit(1)

    for resultat in resultats:
        _afficher_resultat(resultat)


def statut(
    cle: str = typer.Argument(..., help="Cle de l'obligation (ex: TVA_CA12_2027)"),
    nouveau_statut: str = typer.Argument(..., help="pending, paid ou overdue"),
    montant: Optional[str] = typer.Option(None, "--montant", "-m", help="Montant reel"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Notes"),
) -> None:
    """Enregistrer le statut (et optionnellement le montant reel) d'une obligation."""
    from fiscalfr.cli.app import get_surcharges_path

    valides = [s.value for s in StatutObligation]
    if nouveau_statut not in valides:
        console.print(
            f"[red]Statut invalide '{nouveau_statut}'.[/red] "
            f"Valeurs acceptees: {', '.join(valides)}"
        )
        raise typer.Exit(1)

    montant_decimal = lire_montant(montant) if montant is not None else None

    registre = RegistreSurcharges(get_surcharges_path())
    surcharge = registre.mettre_a_jour_statut(cle, nouveau_statut, montant_decimal, notes)

    style = _statut_style(surcharge.statut)
    console.print(f"{cle}: [{style}]{surcharge.statut.value}[/{style}]")
    if surcharge.paye_le is not None:
        console.print(f"  Paye le {surcharge.paye_le:%Y-%m-%d %H:%M}")


def rappels() -> None:
    """Afficher les rappels des obligations dans leur fenetre d'alerte."""
    from fiscalfr.cli.app import get_config_path, get_surcharges_path

    aujourd_hui = generateur.date_du_jour()
    resultats = obtenir_obligations_plage(
        aujourd_hui.year,
        aujourd_hui.year + 1,
        get_config_path(),
        get_surcharges_path(),
        aujourd_hui,
    )
    toutes = [o for r in resultats for o in r.obligations]
    texte = formater_rappels_cli(obtenir_alertes(toutes, aujourd_hui))

    if texte is None:
        console.print("[green]Aucune obligation dans les 30 prochains jours.[/green]")
        return
    console.print(texte)
