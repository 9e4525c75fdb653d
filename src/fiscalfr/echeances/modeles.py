"""Modeles de donnees des obligations fiscales.

ConfigEntreprise (entree du generateur), Obligation (une echeance generee)
et ResultatObligations (enveloppe retournee pour une annee civile).
Aucune dependance interne: ce module peut etre importe partout.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TypeObligation(str, Enum):
    """Categorie d'obligation fiscale."""

    TVA_ACOMPTE = "TVA_ACOMPTE"  # Acompte semestriel (55 % juillet / 40 % decembre)
    TVA_CA12 = "TVA_CA12"  # Declaration annuelle CA12 (reel simplifie)
    LIASSE = "LIASSE"  # Liasse fiscale annuelle
    CFE = "CFE"  # Cotisation fonciere des entreprises
    URSSAF = "URSSAF"
    AUTRE = "AUTRE"


class StatutObligation(str, Enum):
    """Statut de traitement d'une obligation."""

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class RegimeTva(str, Enum):
    """Regime de TVA de l'entite."""

    REEL_SIMPLIFIE = "reel_simplifie"  # CA12 + 2 acomptes -- art. 287 III CGI
    REEL_NORMAL = "reel_normal"  # CA3 mensuelle ou trimestrielle
    FRANCHISE_BASE = "franchise_base"  # Ni TVA facturee ni declaree


def _vers_decimal(v: object) -> object:
    """Passe les float par str avant Decimal pour eviter le bruit binaire."""
    if isinstance(v, float):
        return Decimal(str(v))
    return v


class ConfigEntreprise(BaseModel):
    """Configuration fiscale de l'entite, fournie a chaque appel du generateur."""

    model_config = ConfigDict(frozen=True)

    date_creation: datetime.date
    date_premiere_cloture: datetime.date
    mois_cloture: int = Field(default=12, ge=1, le=12)
    jour_cloture: int = Field(default=31, ge=1, le=31)
    regime_tva: RegimeTva = RegimeTva.REEL_SIMPLIFIE
    urssaf_active: bool = False
    tva_par_exercice: dict[int, Decimal] = Field(
        default_factory=dict,
        description="TVA nette par exercice, ex: {2026: 12000}",
    )
    montant_cfe_estime: Optional[Decimal] = None

    @field_validator("tva_par_exercice", mode="before")
    @classmethod
    def _coerce_tva(cls, v: object) -> object:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {int(k): _vers_decimal(montant) for k, montant in v.items()}
        return v

    @field_validator("montant_cfe_estime", mode="before")
    @classmethod
    def _coerce_cfe(cls, v: object) -> object:
        return _vers_decimal(v)

    @model_validator(mode="after")
    def _verifier_dates(self) -> ConfigEntreprise:
        if self.date_premiere_cloture < self.date_creation:
            raise ValueError(
                f"La premiere cloture ({self.date_premiere_cloture}) precede "
                f"la date de creation ({self.date_creation})"
            )
        return self

    @property
    def annee_creation(self) -> int:
        """Premiere annee civile de l'entite."""
        return self.date_creation.year

    @property
    def annee_premier_exercice(self) -> int:
        """Annee du premier exercice (annee de la premiere cloture)."""
        return self.date_premiere_cloture.year


class Obligation(BaseModel):
    """Une obligation fiscale datee (depot, paiement ou declaration)."""

    model_config = ConfigDict(frozen=True)

    id: str
    cle: str = Field(description="Cle deterministe, ex: TVA_CA12_2027")
    type: TypeObligation
    libelle: str
    description: str
    date_echeance: datetime.date
    date_alerte: datetime.date
    exercice_fiscal: int
    annee_civile: int
    recurrente: bool
    premiere_annee: bool
    statut: StatutObligation = StatutObligation.PENDING
    montant: Optional[Decimal] = None
    tags: list[str] = []
    reference_legale: Optional[str] = None


class ResultatObligations(BaseModel):
    """Obligations d'une annee civile, triees par date d'echeance, avec avertissements."""

    annee: int
    obligations: list[Obligation]
    config: ConfigEntreprise
    avertissements: list[str] = []
