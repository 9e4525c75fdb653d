"""Vue calendrier et alertes des obligations fiscales.

Transforme les obligations generees (eventuellement fusionnees avec les
surcharges) en evenements de calendrier filtres par mois, et calcule les
alertes actives a partir de la date d'alerte de chaque obligation.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Literal, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from fiscalfr.echeances import generateur
from fiscalfr.echeances.modeles import Obligation, ResultatObligations, StatutObligation


# ---------------------------------------------------------------------------
# Modeles
# ---------------------------------------------------------------------------


class EvenementCalendrier(BaseModel):
    """Entree de calendrier liee a une obligation par sa cle."""

    cle: str
    date: datetime.date
    titre: str
    montant: Optional[Decimal] = None
    statut: StatutObligation


class AlerteObligation(BaseModel):
    """Alerte active pour une obligation approchante."""

    obligation: Obligation
    jours_restants: int
    urgence: Literal["critique", "urgent", "normal"]


# ---------------------------------------------------------------------------
# Evenements
# ---------------------------------------------------------------------------


def _vers_evenement(obligation: Obligation) -> EvenementCalendrier:
    return EvenementCalendrier(
        cle=obligation.cle,
        date=obligation.date_echeance,
        titre=obligation.libelle,
        montant=obligation.montant,
        statut=obligation.statut,
    )


def obligations_de_l_annee(resultat: ResultatObligations) -> list[EvenementCalendrier]:
    """Tous les evenements de l'annee, tries par date."""
    evenements = [_vers_evenement(o) for o in resultat.obligations]
    return sorted(evenements, key=lambda e: e.date)


def evenements_du_mois(
    resultat: ResultatObligations,
    annee: int,
    mois: int,
) -> list[EvenementCalendrier]:
    """Evenements dont l'echeance tombe dans le mois donne.

    Args:
        resultat: Resultat du generateur (typiquement pour `annee`).
        annee: Annee civile du mois.
        mois: Mois 1-12.

    Returns:
        Evenements du mois tries par date.
    """
    debut = datetime.date(annee, mois, 1)
    fin = debut + relativedelta(months=1)
    return [e for e in obligations_de_l_annee(resultat) if debut <= e.date < fin]


# ---------------------------------------------------------------------------
# Alertes
# ---------------------------------------------------------------------------


def obtenir_alertes(
    obligations: list[Obligation],
    aujourd_hui: datetime.date | None = None,
) -> list[AlerteObligation]:
    """Retourne les alertes des obligations entre leur date d'alerte et leur echeance.

    Args:
        obligations: Obligations a verifier.
        aujourd_hui: Date de reference (defaut: aujourd'hui).

    Returns:
        Alertes actives triees par jours_restants (plus urgent d'abord).
    """
    if aujourd_hui is None:
        aujourd_hui = generateur.date_du_jour()

    alertes: list[AlerteObligation] = []

    for obligation in obligations:
        if obligation.statut == StatutObligation.PAID:
            continue
        if not obligation.date_alerte <= aujourd_hui <= obligation.date_echeance:
            continue

        jours = (obligation.date_echeance - aujourd_hui).days
        if jours <= 7:
            urgence: Literal["critique", "urgent", "normal"] = "critique"
        elif jours <= 14:
            urgence = "urgent"
        else:
            urgence = "normal"

        alertes.append(
            AlerteObligation(
                obligation=obligation,
                jours_restants=jours,
                urgence=urgence,
            )
        )

    return sorted(alertes, key=lambda a: a.jours_restants)


def formater_rappels_cli(alertes: list[AlerteObligation]) -> str | None:
    """Formate les alertes avec le markup Rich.

    Returns:
        Chaine formatee Rich ou None si aucune alerte.
    """
    if not alertes:
        return None

    couleur_map = {
        "critique": "red",
        "urgent": "yellow",
        "normal": "blue",
    }

    lignes: list[str] = []
    for alerte in alertes:
        couleur = couleur_map.get(alerte.urgence, "blue")
        icone = "(!)" if alerte.urgence in ("critique", "urgent") else "(i)"
        montant = (
            f", {alerte.obligation.montant:,.2f} EUR"
            if alerte.obligation.montant is not None
            else ""
        )
        lignes.append(
            f"[{couleur}]{icone} Rappel: {alerte.obligation.libelle} "
            f"dans {alerte.jours_restants} jours "
            f"({alerte.obligation.date_echeance}{montant})[/{couleur}]"
        )

    return "\n".join(lignes)
