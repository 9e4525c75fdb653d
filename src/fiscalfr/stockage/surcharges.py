"""Registre des surcharges d'obligations, persiste en YAML.

Le generateur recalcule les obligations a chaque appel; ce registre ne
stocke que ce que l'utilisateur a modifie (statut, montant reel, notes),
indexe par la cle deterministe de l'obligation -- jamais par son id.
"""

from __future__ import annotations

import datetime
import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

from fiscalfr.echeances.modeles import ResultatObligations, StatutObligation

logger = logging.getLogger(__name__)

CHEMIN_SURCHARGES_DEFAUT = Path("data/surcharges.yaml")


class Surcharge(BaseModel):
    """Modification utilisateur d'une obligation generee."""

    cle: str
    statut: StatutObligation = StatutObligation.PENDING
    montant: Optional[Decimal] = None
    notes: Optional[str] = None
    paye_le: Optional[datetime.datetime] = None
    mis_a_jour_le: datetime.datetime

    @field_validator("montant", mode="before")
    @classmethod
    def _coerce_decimal(cls, v: object) -> object:
        if isinstance(v, float):
            v = Decimal(str(v))
        if isinstance(v, Decimal) and not v.is_finite():
            raise ValueError(f"Montant non fini: {v}")
        return v


class RegistreSurcharges:
    """Surcharges d'obligations persistees en YAML, indexees par cle."""

    def __init__(self, chemin: Path | None = None) -> None:
        self.chemin = chemin or CHEMIN_SURCHARGES_DEFAUT
        self._surcharges: dict[str, Surcharge] = {}
        self._charger()

    def _charger(self) -> None:
        """Charge les surcharges depuis le fichier YAML."""
        if self.chemin.exists():
            with open(self.chemin, encoding="utf-8") as f:
                donnees = yaml.safe_load(f)
            if donnees and isinstance(donnees, list):
                for d in donnees:
                    surcharge = Surcharge.model_validate(d)
                    self._surcharges[surcharge.cle] = surcharge

    def _sauvegarder(self) -> None:
        """Sauvegarde les surcharges dans le fichier YAML."""
        self.chemin.parent.mkdir(parents=True, exist_ok=True)
        donnees = [s.model_dump(mode="json") for s in self._surcharges.values()]
        with open(self.chemin, "w", encoding="utf-8") as f:
            yaml.dump(donnees, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def obtenir(self, cle: str) -> Surcharge | None:
        """Retourne la surcharge d'une obligation, ou None."""
        return self._surcharges.get(cle)

    def lister(self, statut: StatutObligation | None = None) -> list[Surcharge]:
        """Liste les surcharges, optionnellement filtrees par statut."""
        if statut is None:
            return list(self._surcharges.values())
        return [s for s in self._surcharges.values() if s.statut == statut]

    def mettre_a_jour_statut(
        self,
        cle: str,
        statut: StatutObligation | str,
        montant: Optional[Decimal] = None,
        notes: Optional[str] = None,
        maintenant: Optional[datetime.datetime] = None,
    ) -> Surcharge:
        """Cree ou met a jour la surcharge d'une obligation.

        Le passage a "paid" enregistre la date de paiement. Les autres
        statuts n'en inventent jamais (une date deja enregistree est
        conservee). Montant et notes non fournis gardent leur valeur.

        Raises:
            ValueError: Si le statut est inconnu.
            pydantic.ValidationError: Si le montant n'est pas un nombre fini.
        """
        statut = StatutObligation(statut)
        if maintenant is None:
            maintenant = datetime.datetime.now(datetime.timezone.utc)

        existante = self._surcharges.get(cle)
        donnees = existante.model_dump() if existante is not None else {"cle": cle}
        donnees["statut"] = statut
        donnees["mis_a_jour_le"] = maintenant
        if montant is not None:
            donnees["montant"] = montant
        if notes is not None:
            donnees["notes"] = notes
        if statut == StatutObligation.PAID:
            donnees["paye_le"] = maintenant

        # Valide avant sauvegarde (montant fini)
        surcharge = Surcharge.model_validate(donnees)

        self._surcharges[cle] = surcharge
        self._sauvegarder()
        logger.info("Surcharge enregistree: %s -> %s", cle, statut.value)
        return surcharge

    def appliquer(self, resultat: ResultatObligations) -> ResultatObligations:
        """Superpose statut et montant stockes aux obligations de meme cle.

        Tous les autres champs restent ceux du generateur.
        """
        obligations = []
        for obligation in resultat.obligations:
            surcharge = self._surcharges.get(obligation.cle)
            if surcharge is None:
                obligations.append(obligation)
                continue
            changements: dict[str, object] = {"statut": surcharge.statut}
            if surcharge.montant is not None:
                changements["montant"] = surcharge.montant
            obligations.append(obligation.model_copy(update=changements))

        return resultat.model_copy(update={"obligations": obligations})
