"""Generation des obligations fiscales -- regime reel simplifie de TVA.

Module pur: aucun acces disque, aucun effet de bord. La seule lecture
exterieure est la date du jour (statut overdue), isolee dans date_du_jour().

Regles implementees:

[TVA reel simplifie] (art. 287 III CGI -- BOFiP TVA-DECLA-20-20)
    Premiere annee (creation -> premiere cloture): ni acomptes ni CA12.
    Annees suivantes:
      - mai N+1: CA12 de l'exercice N (2e jour ouvrable, le 1er mai est ferie)
      - 15 juillet: acompte 55 % x TVA nette N-1
      - 15 decembre: acompte 40 % x TVA nette N-1
      (ajustes au jour ouvrable suivant)

[CFE] (art. 1478 CGI)
    Exoneration totale l'annee civile de creation, puis paiement au 15 decembre.

[Liasse fiscale] (art. 223 CGI)
    Cloture au 31/12 -> depot le 2e jour ouvrable de mai N+1.

Une famille d'obligations est une fonction (annee, config, avertissements)
-> list[Obligation]. Pour ajouter un regime, ecrire la fonction et
l'enregistrer dans GENERATEURS_TVA; pour une nouvelle famille commune,
l'ajouter a FAMILLES_COMMUNES.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from fiscalfr.echeances.jours_ouvres import (
    ajuster_jour_ouvrable,
    nieme_jour_ouvrable_du_mois,
)
from fiscalfr.echeances.modeles import (
    ConfigEntreprise,
    Obligation,
    RegimeTva,
    ResultatObligations,
    StatutObligation,
    TypeObligation,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

# Part de la TVA N-1 exigee a chaque acompte (art. 287 III CGI). Les 5 %
# restants sont regles avec la CA12.
TAUX_ACOMPTE_JUILLET = Decimal("0.55")
TAUX_ACOMPTE_DECEMBRE = Decimal("0.40")

JOURS_ALERTE_AVANT_ECHEANCE = 30

TWO_PLACES = Decimal("0.01")

FamilleObligations = Callable[[int, ConfigEntreprise, list[str]], list[Obligation]]


# ---------------------------------------------------------------------------
# Utilitaires
# ---------------------------------------------------------------------------


def date_du_jour() -> datetime.date:
    """Date du jour utilisee pour le statut overdue."""
    return datetime.date.today()


def _creer_obligation(**champs: object) -> Obligation:
    """Construit une Obligation avec id frais, date d'alerte et statut pending."""
    date_echeance = champs["date_echeance"]
    return Obligation(
        id=str(uuid.uuid4()),
        date_alerte=date_echeance - datetime.timedelta(days=JOURS_ALERTE_AVANT_ECHEANCE),
        statut=StatutObligation.PENDING,
        **champs,
    )


def _calculer_acompte(base: Optional[Decimal], taux: Decimal) -> Optional[Decimal]:
    if base is None:
        return None
    return (base * taux).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _date_depot_annuel(annee: int) -> datetime.date:
    """2e jour ouvrable de mai: CA12 et liasse d'un exercice clos au 31/12."""
    return nieme_jour_ouvrable_du_mois(annee, 5, 2)


def _est_premier_exercice(exercice: int, config: ConfigEntreprise) -> bool:
    return exercice == config.annee_premier_exercice


# ---------------------------------------------------------------------------
# Familles TVA (une par regime)
# ---------------------------------------------------------------------------


def generer_tva_reel_simplifie(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """Obligations TVA reel simplifie dues pendant l'annee civile.

    Exemple (creation mars 2026, cloture 31/12/2026):
        2026: rien
        2027: CA12 exercice 2026 (premiere), acomptes 55 %/40 % de TVA(2026)
        2028: CA12 exercice 2027, acomptes 55 %/40 % de TVA(2027)
    """
    obligations: list[Obligation] = []
    exercice_precedent = annee - 1

    # CA12: deposee en mai pour l'exercice precedent
    if exercice_precedent >= config.annee_creation:
        premiere = _est_premier_exercice(exercice_precedent, config)
        if premiere:
            libelle = f"CA12 - Premiere declaration annuelle (exercice {exercice_precedent})"
            detail = (
                f"Premiere declaration suite a la creation: aucun acompte "
                f"n'a ete verse en {exercice_precedent}. "
            )
        else:
            libelle = f"CA12 - Declaration annuelle TVA (exercice {exercice_precedent})"
            detail = (
                f"Solde = TVA annuelle {exercice_precedent} moins les acomptes "
                f"deja verses (55 % + 40 %). "
            )
        obligations.append(
            _creer_obligation(
                cle=f"TVA_CA12_{annee}",
                type=TypeObligation.TVA_CA12,
                libelle=libelle,
                description=(
                    f"Declaration annuelle de TVA (formulaire CA12) pour l'exercice "
                    f"clos le 31/12/{exercice_precedent}. {detail}"
                    f"Depot en ligne obligatoire. Art. 287 III CGI."
                ),
                date_echeance=_date_depot_annuel(annee),
                exercice_fiscal=exercice_precedent,
                annee_civile=annee,
                recurrente=True,
                premiere_annee=premiere,
                tags=["TVA", "CA12", "annuel"],
                reference_legale="Art. 287 III CGI - BOFiP TVA-DECLA-20-20",
            )
        )

    # Acomptes: aucun la premiere annee (pas de TVA N-1 de reference)
    if _est_premier_exercice(annee, config) or annee < config.annee_creation:
        return obligations

    base = config.tva_par_exercice.get(exercice_precedent)
    if base is None:
        avertissements.append(
            f"TVA nette de l'exercice {exercice_precedent} non renseignee: "
            f"montants des acomptes {annee} non calculables. "
            f"Renseigner tva_par_exercice[{exercice_precedent}] dans la configuration."
        )

    echeances_acomptes = (
        ("JUILLET", "Juillet", 7, TAUX_ACOMPTE_JUILLET, "Premier", "juillet"),
        ("DECEMBRE", "Decembre", 12, TAUX_ACOMPTE_DECEMBRE, "Deuxieme", "decembre"),
    )
    for suffixe, nom_mois, mois, taux, rang, tag in echeances_acomptes:
        pourcentage = int(taux * 100)
        obligations.append(
            _creer_obligation(
                cle=f"TVA_ACOMPTE_{suffixe}_{annee}",
                type=TypeObligation.TVA_ACOMPTE,
                libelle=f"Acompte TVA - {nom_mois} {annee} ({pourcentage} %)",
                description=(
                    f"{rang} acompte TVA reel simplifie: {pourcentage} % de la TVA "
                    f"nette de l'exercice {exercice_precedent}. Versement au plus tard "
                    f"le 15 {tag} {annee} (ou jour ouvrable suivant). Art. 287 III CGI."
                ),
                date_echeance=ajuster_jour_ouvrable(datetime.date(annee, mois, 15)),
                exercice_fiscal=annee,
                annee_civile=annee,
                recurrente=True,
                premiere_annee=False,
                montant=_calculer_acompte(base, taux),
                tags=["TVA", "acompte", tag],
                reference_legale="Art. 287 III CGI",
            )
        )

    return obligations


def generer_tva_reel_normal(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """Reel normal (CA3 mensuelle/trimestrielle): non implemente, avertit seulement."""
    avertissements.append(
        "Regime de TVA reel normal non encore implemente: "
        f"aucune obligation TVA generee pour {annee}."
    )
    return []


def generer_tva_franchise_base(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """Franchise en base: aucune TVA a declarer."""
    return []


GENERATEURS_TVA: dict[RegimeTva, FamilleObligations] = {
    RegimeTva.REEL_SIMPLIFIE: generer_tva_reel_simplifie,
    RegimeTva.REEL_NORMAL: generer_tva_reel_normal,
    RegimeTva.FRANCHISE_BASE: generer_tva_franchise_base,
}

_regimes_manquants = set(RegimeTva) - set(GENERATEURS_TVA)
if _regimes_manquants:
    raise RuntimeError(
        f"Regimes de TVA sans generateur: {sorted(r.value for r in _regimes_manquants)}"
    )


# ---------------------------------------------------------------------------
# Familles communes a tous les regimes
# ---------------------------------------------------------------------------


def generer_liasse(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """Depot de la liasse fiscale de l'exercice precedent (mai, 2e jour ouvrable)."""
    exercice_precedent = annee - 1
    if exercice_precedent < config.annee_creation:
        return []

    premiere = _est_premier_exercice(exercice_precedent, config)
    libelle = (
        f"Liasse fiscale - Premiere cloture (exercice {exercice_precedent})"
        if premiere
        else f"Liasse fiscale (exercice {exercice_precedent})"
    )
    return [
        _creer_obligation(
            cle=f"LIASSE_{annee}",
            type=TypeObligation.LIASSE,
            libelle=libelle,
            description=(
                f"Depot de la liasse fiscale pour l'exercice clos le "
                f"31/12/{exercice_precedent}. Delai legal: 2e jour ouvrable de mai. "
                f"Teletransmission EDI obligatoire pour les entites soumises a l'IS. "
                f"Formulaire 2065 et annexes."
            ),
            date_echeance=_date_depot_annuel(annee),
            exercice_fiscal=exercice_precedent,
            annee_civile=annee,
            recurrente=True,
            premiere_annee=premiere,
            tags=["liasse", "IS", "annuel", "comptabilite"],
            reference_legale="Art. 223 CGI - Formulaire DGFiP 2065",
        )
    ]


def generer_cfe(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """CFE due au 15 decembre, sauf l'annee civile de creation (exoneree)."""
    if annee == config.annee_creation:
        return []

    premiere_due = annee == config.annee_creation + 1
    exoneration = (
        f"Premiere CFE due (exoneration accordee en {config.annee_creation}, "
        f"premiere annee civile -- art. 1478 CGI). "
        if premiere_due
        else ""
    )
    return [
        _creer_obligation(
            cle=f"CFE_{annee}",
            type=TypeObligation.CFE,
            libelle=f"CFE - Cotisation fonciere des entreprises {annee}",
            description=(
                f"Paiement de la CFE au plus tard le 15 decembre {annee}. {exoneration}"
                f"Montant fixe par l'avis d'imposition de la commune (recu en novembre). "
                f"Paiement en ligne obligatoire."
            ),
            date_echeance=ajuster_jour_ouvrable(datetime.date(annee, 12, 15)),
            exercice_fiscal=annee,
            annee_civile=annee,
            recurrente=True,
            premiere_annee=premiere_due,
            montant=config.montant_cfe_estime,
            tags=["CFE", "impots locaux", "decembre"],
            reference_legale="Art. 1447 et 1478 CGI",
        )
    ]


def generer_urssaf(
    annee: int,
    config: ConfigEntreprise,
    avertissements: list[str],
) -> list[Obligation]:
    """Cotisations URSSAF: module non implemente, avertit si active."""
    if config.urssaf_active:
        avertissements.append(
            "Module URSSAF active mais non encore implemente: "
            "a completer selon la structure juridique."
        )
    return []


FAMILLES_COMMUNES: tuple[FamilleObligations, ...] = (
    generer_liasse,
    generer_cfe,
    generer_urssaf,
)


# ---------------------------------------------------------------------------
# API publique
# ---------------------------------------------------------------------------


def _marquer_en_retard(
    obligations: list[Obligation],
    reference: datetime.date,
) -> list[Obligation]:
    """Passe a overdue les obligations pending dont l'echeance est passee."""
    return [
        o.model_copy(update={"statut": StatutObligation.OVERDUE})
        if o.statut == StatutObligation.PENDING and o.date_echeance < reference
        else o
        for o in obligations
    ]


def generer_obligations(
    annee: int,
    config: ConfigEntreprise,
    aujourd_hui: Optional[datetime.date] = None,
) -> ResultatObligations:
    """Genere toutes les obligations dues pendant une annee civile.

    Args:
        annee: Annee civile (ex: 2027).
        config: Configuration fiscale de l'entite.
        aujourd_hui: Date de reference pour le statut overdue (defaut: aujourd'hui).

    Returns:
        ResultatObligations avec les obligations triees par date d'echeance
        et les avertissements non bloquants.
    """
    reference = aujourd_hui if aujourd_hui is not None else date_du_jour()
    avertissements: list[str] = []
    obligations: list[Obligation] = []

    familles = (GENERATEURS_TVA[config.regime_tva], *FAMILLES_COMMUNES)
    for famille in familles:
        obligations.extend(famille(annee, config, avertissements))

    obligations.sort(key=lambda o: o.date_echeance)
    obligations = _marquer_en_retard(obligations, reference)

    logger.debug("%d obligation(s) generee(s) pour %d", len(obligations), annee)
    for avertissement in avertissements:
        logger.info("Avertissement %d: %s", annee, avertissement)

    return ResultatObligations(
        annee=annee,
        obligations=obligations,
        config=config,
        avertissements=avertissements,
    )


def generer_obligations_pluriannuelles(
    de: int,
    a: int,
    config: ConfigEntreprise,
    aujourd_hui: Optional[datetime.date] = None,
) -> list[ResultatObligations]:
    """Genere les obligations de chaque annee de l'intervalle [de, a].

    Raises:
        ValueError: Si de > a.
    """
    if de > a:
        raise ValueError(f"Intervalle d'annees invalide: {de} > {a}")

    reference = aujourd_hui if aujourd_hui is not None else date_du_jour()
    return [generer_obligations(annee, config, reference) for annee in range(de, a + 1)]
