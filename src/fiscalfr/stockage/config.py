"""Configuration fiscale de l'entite, persistee en YAML.

La configuration est creee avec des valeurs par defaut au premier acces,
puis mise a jour au fil des exercices (TVA nette connue, montant CFE revise).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from fiscalfr.echeances.modeles import ConfigEntreprise

logger = logging.getLogger(__name__)

CHEMIN_CONFIG_DEFAUT = Path("data/fiscal.yaml")


# ---------------------------------------------------------------------------
# YAML par defaut integre
# ---------------------------------------------------------------------------

CONFIG_DEFAUT_YAML = """
date_creation: 2026-01-01
date_premiere_cloture: 2026-12-31
mois_cloture: 12
jour_cloture: 31
regime_tva: reel_simplifie
urssaf_active: false
tva_par_exercice: {}
montant_cfe_estime: null
"""


# ---------------------------------------------------------------------------
# Chargement et sauvegarde
# ---------------------------------------------------------------------------


def charger_config(
    chemin: str | Path = CHEMIN_CONFIG_DEFAUT,
    *,
    _default_yaml: bool = False,
) -> ConfigEntreprise:
    """Charge et valide la configuration fiscale depuis un fichier YAML.

    Args:
        chemin: Chemin vers le fichier YAML.
        _default_yaml: Si True, utilise la configuration par defaut integree.

    Returns:
        ConfigEntreprise validee par Pydantic.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas et _default_yaml est False.
    """
    if _default_yaml:
        raw = yaml.safe_load(CONFIG_DEFAUT_YAML)
    else:
        path = Path(chemin)
        if not path.exists():
            raise FileNotFoundError(f"Fichier de configuration introuvable: {chemin}")
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))

    return ConfigEntreprise.model_validate(raw or {})


def sauvegarder_config(config: ConfigEntreprise, chemin: str | Path = CHEMIN_CONFIG_DEFAUT) -> None:
    """Ecrit la configuration en YAML (montants en chaines pour garder les Decimal)."""
    path = Path(chemin)
    path.parent.mkdir(parents=True, exist_ok=True)
    donnees = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(donnees, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def obtenir_ou_creer_config(chemin: str | Path = CHEMIN_CONFIG_DEFAUT) -> ConfigEntreprise:
    """Charge la configuration, ou cree le fichier avec les valeurs par defaut."""
    path = Path(chemin)
    if path.exists():
        return charger_config(path)

    config = charger_config(_default_yaml=True)
    sauvegarder_config(config, path)
    logger.info("Configuration fiscale par defaut creee: %s", path)
    return config


def mettre_a_jour_config(
    chemin: str | Path = CHEMIN_CONFIG_DEFAUT,
    **changements: Any,
) -> ConfigEntreprise:
    """Met a jour partiellement la configuration (creee si absente).

    Les entrees de `tva_par_exercice` sont fusionnees avec les exercices
    deja connus; les autres champs sont remplaces. `montant_cfe_estime=None`
    efface le montant.

    Raises:
        pydantic.ValidationError: Si la configuration resultante est invalide.
    """
    champs = sorted(changements)
    actuelle = obtenir_ou_creer_config(chemin)
    donnees = actuelle.model_dump()

    nouvelle_tva = changements.pop("tva_par_exercice", None)
    if nouvelle_tva:
        fusion = dict(donnees["tva_par_exercice"])
        fusion.update({int(k): v for k, v in nouvelle_tva.items()})
        donnees["tva_par_exercice"] = fusion

    donnees.update(changements)
    config = ConfigEntreprise.model_validate(donnees)
    sauvegarder_config(config, chemin)
    logger.info("Configuration fiscale mise a jour (%s): %s", ", ".join(champs), chemin)
    return config
