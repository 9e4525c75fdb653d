"""Calcul des jours ouvres en France.

Seuls les jours feries FIXES sont pris en compte. Les fetes mobiles
(Paques, Ascension, Pentecote) ne sont pas modelisees: c'est une
simplification assumee, pas un oubli.

Toutes les fonctions sont pures.
"""

from __future__ import annotations

import datetime

# Jours feries fixes (mois, jour) -- art. L. 3133-1 Code du travail.
JOURS_FERIES_FIXES: tuple[tuple[int, int], ...] = (
    (1, 1),  # Jour de l'An
    (5, 1),  # Fete du Travail: le 1er mai n'est donc jamais ouvre
    (5, 8),  # Victoire 1945
    (7, 14),  # Fete nationale
    (8, 15),  # Assomption
    (11, 1),  # Toussaint
    (11, 11),  # Armistice
    (12, 25),  # Noel
)

_UN_JOUR = datetime.timedelta(days=1)


def est_jour_ferie(d: datetime.date) -> bool:
    """Vrai si la date est un jour ferie fixe."""
    return (d.month, d.day) in JOURS_FERIES_FIXES


def est_weekend(d: datetime.date) -> bool:
    """Vrai si la date tombe un samedi ou un dimanche."""
    return d.weekday() >= 5


def est_jour_ouvrable(d: datetime.date) -> bool:
    """Vrai si la date n'est ni un week-end ni un jour ferie fixe."""
    return not est_weekend(d) and not est_jour_ferie(d)


def jour_ouvrable_suivant(d: datetime.date) -> datetime.date:
    """Retourne le premier jour ouvrable strictement APRES la date.

    La date elle-meme n'est jamais retournee, meme si elle est ouvrable.
    """
    suivant = d + _UN_JOUR
    while not est_jour_ouvrable(suivant):
        suivant += _UN_JOUR
    return suivant


def ajuster_jour_ouvrable(d: datetime.date) -> datetime.date:
    """Retourne la date si elle est ouvrable, sinon le jour ouvrable suivant."""
    if est_jour_ouvrable(d):
        return d
    return jour_ouvrable_suivant(d)


def nieme_jour_ouvrable_du_mois(annee: int, mois: int, n: int) -> datetime.date:
    """Retourne le n-ieme jour ouvrable d'un mois, en comptant depuis le 1er.

    Exemple: nieme_jour_ouvrable_du_mois(2027, 5, 2) -> 2027-05-04
    (1er mai ferie, 2 mai dimanche, 3 mai = 1er ouvrable).

    Args:
        annee: Annee civile.
        mois: Mois 1-12.
        n: Rang (1 = premier jour ouvrable).

    Raises:
        ValueError: Si n < 1 ou si le mois se termine avant le rang demande.
    """
    if n < 1:
        raise ValueError(f"Le rang doit etre >= 1 (recu: {n})")

    d = datetime.date(annee, mois, 1)
    compte = 0
    while d.month == mois:
        if est_jour_ouvrable(d):
            compte += 1
            if compte == n:
                return d
        d += _UN_JOUR

    raise ValueError(
        f"Impossible de trouver le {n}e jour ouvrable du mois {mois:02d}/{annee} "
        f"(seulement {compte} jours ouvrables)"
    )


def nieme_jour_ouvrable_apres(d: datetime.date, n: int) -> datetime.date:
    """Applique jour_ouvrable_suivant n fois a partir de la date."""
    resultat = d
    for _ in range(n):
        resultat = jour_ouvrable_suivant(resultat)
    return resultat
