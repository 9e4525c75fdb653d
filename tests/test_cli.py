"""Tests CLI pour FiscalFR (commandes fiscal)."""

from __future__ import annotations

import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from freezegun import freeze_time
from rich.console import Console
from typer.testing import CliRunner

import fiscalfr
from fiscalfr.cli.app import app
from fiscalfr.echeances import generateur
from fiscalfr.echeances.modeles import ConfigEntreprise, StatutObligation
from fiscalfr.stockage.config import charger_config, sauvegarder_config
from fiscalfr.stockage.surcharges import RegistreSurcharges

runner = CliRunner()


@pytest.fixture(autouse=True)
def console_large(monkeypatch):
    """Console Rich assez large pour que les tableaux ne soient pas tronques."""
    for module in ("fiscalfr.cli.app", "fiscalfr.cli.obligations", "fiscalfr.cli.config"):
        monkeypatch.setattr(f"{module}.console", Console(width=200))


@pytest.fixture
def chemins(tmp_path: Path) -> tuple[Path, Path]:
    """Configuration de reference et registre vide dans tmp_path."""
    chemin_config = tmp_path / "fiscal.yaml"
    sauvegarder_config(
        ConfigEntreprise(
            date_creation=datetime.date(2026, 3, 1),
            date_premiere_cloture=datetime.date(2026, 12, 31),
            tva_par_exercice={2026: Decimal("12000")},
            montant_cfe_estime=Decimal("800"),
        ),
        chemin_config,
    )
    return chemin_config, tmp_path / "surcharges.yaml"


def _invoquer(chemins: tuple[Path, Path], *args: str):
    chemin_config, chemin_surcharges = chemins
    return runner.invoke(
        app,
        ["--config", str(chemin_config), "--surcharges", str(chemin_surcharges), *args],
    )


# ---------------------------------------------------------------------------
# Tests: options globales
# ---------------------------------------------------------------------------


class TestApp:
    """Tests pour l'application principale."""

    def test_version(self) -> None:
        """--version affiche la version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"FiscalFR {fiscalfr.__version__}" in result.output

    def test_aide(self) -> None:
        """L'aide liste les commandes."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for commande in ("obligations", "plage", "statut", "rappels", "config"):
            assert commande in result.output


# ---------------------------------------------------------------------------
# Tests: obligations
# ---------------------------------------------------------------------------


class TestObligations:
    """Tests pour fiscal obligations et fiscal plage."""

    def test_obligations_2027(self, chemins) -> None:
        """Le tableau 2027 liste les cinq cles et les montants."""
        result = _invoquer(chemins, "obligations", "--annee", "2027")
        assert result.exit_code == 0, result.output
        assert "Obligations fiscales 2027" in result.output
        for cle in (
            "TVA_CA12_2027",
            "LIASSE_2027",
            "TVA_ACOMPTE_JUILLET_2027",
            "TVA_ACOMPTE_DECEMBRE_2027",
            "CFE_2027",
        ):
            assert cle in result.output
        assert "6,600.00 EUR" in result.output

    def test_annee_sans_obligation(self, chemins) -> None:
        """2026: message explicite."""
        result = _invoquer(chemins, "obligations", "-a", "2026")
        assert result.exit_code == 0
        assert "Aucune obligation en 2026" in result.output

    def test_avertissement_affiche(self, chemins) -> None:
        """TVA 2027 absente: avertissement pour les acomptes 2028."""
        result = _invoquer(chemins, "obligations", "--annee", "2028")
        assert result.exit_code == 0
        assert "Avertissement:" in result.output
        assert "2027" in result.output

    def test_plage(self, chemins) -> None:
        """Un tableau par annee de la plage."""
        result = _invoquer(chemins, "plage", "2027", "2028")
        assert result.exit_code == 0
        assert "Obligations fiscales 2027" in result.output
        assert "Obligations fiscales 2028" in result.output

    def test_plage_invalide(self, chemins) -> None:
        """de > a: erreur et code 1."""
        result = _invoquer(chemins, "plage", "2028", "2027")
        assert result.exit_code == 1
        assert "Erreur" in result.output


# ---------------------------------------------------------------------------
# Tests: statut
# ---------------------------------------------------------------------------


class TestStatut:
    """Tests pour fiscal statut."""

    def test_marquer_payee(self, chemins) -> None:
        """paid avec montant: surcharge persistee et date de paiement affichee."""
        result = _invoquer(chemins, "statut", "CFE_2027", "paid", "--montant", "812.50")
        assert result.exit_code == 0, result.output
        assert "CFE_2027" in result.output
        assert "Paye le" in result.output

        surcharge = RegistreSurcharges(chemins[1]).obtenir("CFE_2027")
        assert surcharge is not None
        assert surcharge.statut == StatutObligation.PAID
        assert surcharge.montant == Decimal("812.50")

    def test_surcharge_visible_dans_le_tableau(self, chemins) -> None:
        """Le montant reel remplace l'estimation dans le tableau."""
        _invoquer(chemins, "statut", "CFE_2027", "paid", "-m", "812.50")
        result = _invoquer(chemins, "obligations", "--annee", "2027")
        assert "812.50 EUR" in result.output
        assert "paid" in result.output

    def test_statut_invalide(self, chemins) -> None:
        """Statut inconnu: code 1 et rien d'ecrit."""
        result = _invoquer(chemins, "statut", "CFE_2027", "annule")
        assert result.exit_code == 1
        assert "Statut invalide" in result.output
        assert not chemins[1].exists()

    def test_montant_invalide(self, chemins) -> None:
        """Montant non numerique: code 1."""
        result = _invoquer(chemins, "statut", "CFE_2027", "paid", "--montant", "abc")
        assert result.exit_code == 1
        assert "montant invalide" in result.output

    @pytest.mark.parametrize("montant", ["NaN", "Infinity", "sNaN"])
    def test_montant_non_fini(self, chemins, montant: str) -> None:
        """Montant non fini sur une surcharge existante: refuse, registre intact."""
        _invoquer(chemins, "statut", "CFE_2027", "pending")

        result = _invoquer(chemins, "statut", "CFE_2027", "paid", "--montant", montant)
        assert result.exit_code == 1
        assert "montant invalide" in result.output

        surcharge = RegistreSurcharges(chemins[1]).obtenir("CFE_2027")
        assert surcharge is not None
        assert surcharge.statut == StatutObligation.PENDING
        assert surcharge.montant is None

        result = _invoquer(chemins, "obligations", "--annee", "2027")
        assert result.exit_code == 0, result.output
        assert "CFE_2027" in result.output

    def test_annee_courante_par_defaut(self, chemins, monkeypatch) -> None:
        """Sans --annee, l'annee vient de la date du jour du generateur."""
        monkeypatch.setattr(generateur, "date_du_jour", lambda: datetime.date(2027, 6, 1))
        result = _invoquer(chemins, "obligations")
        assert result.exit_code == 0, result.output
        assert "Obligations fiscales 2027" in result.output


# ---------------------------------------------------------------------------
# Tests: rappels
# ---------------------------------------------------------------------------


class TestRappels:
    """Tests pour fiscal rappels."""

    @freeze_time("2027-12-01")
    def test_rappels_decembre(self, chemins) -> None:
        """Au 1er decembre 2027: acompte de decembre et CFE."""
        result = _invoquer(chemins, "rappels")
        assert result.exit_code == 0, result.output
        assert "Rappel: Acompte TVA - Decembre 2027" in result.output
        assert "CFE" in result.output

    def test_date_du_jour_du_generateur(self, chemins, monkeypatch) -> None:
        """Les rappels lisent la date du jour par generateur.date_du_jour()."""
        monkeypatch.setattr(generateur, "date_du_jour", lambda: datetime.date(2027, 7, 10))
        result = _invoquer(chemins, "rappels")
        assert result.exit_code == 0, result.output
        assert "Acompte TVA - Juillet 2027" in result.output
        assert "dans 5 jours" in result.output

    @freeze_time("2027-02-01")
    def test_aucun_rappel(self, chemins) -> None:
        """Hors fenetre d'alerte: message explicite."""
        result = _invoquer(chemins, "rappels")
        assert result.exit_code == 0
        assert "Aucune obligation dans les 30 prochains jours" in result.output


# ---------------------------------------------------------------------------
# Tests: config
# ---------------------------------------------------------------------------


class TestConfig:
    """Tests pour fiscal config."""

    def test_afficher(self, chemins) -> None:
        """Le tableau montre le regime et la TVA renseignee."""
        result = _invoquer(chemins, "config", "afficher")
        assert result.exit_code == 0
        assert "reel_simplifie" in result.output
        assert "TVA nette 2026" in result.output

    def test_afficher_cree_defaut(self, tmp_path: Path) -> None:
        """Sans fichier, la configuration par defaut est creee."""
        chemin_config = tmp_path / "nouveau.yaml"
        result = runner.invoke(app, ["--config", str(chemin_config), "config", "afficher"])
        assert result.exit_code == 0
        assert chemin_config.exists()

    def test_tva(self, chemins) -> None:
        """config tva ajoute un exercice sans effacer les autres."""
        result = _invoquer(chemins, "config", "tva", "2027", "15000")
        assert result.exit_code == 0, result.output
        config = charger_config(chemins[0])
        assert config.tva_par_exercice == {2026: Decimal("12000"), 2027: Decimal("15000")}

    def test_cfe(self, chemins) -> None:
        """config cfe remplace le montant estime."""
        result = _invoquer(chemins, "config", "cfe", "950")
        assert result.exit_code == 0
        assert charger_config(chemins[0]).montant_cfe_estime == Decimal("950")

    def test_montant_invalide(self, chemins) -> None:
        """Montant non numerique: code 1, configuration inchangee."""
        result = _invoquer(chemins, "config", "cfe", "beaucoup")
        assert result.exit_code == 1
        assert charger_config(chemins[0]).montant_cfe_estime == Decimal("800")

    @pytest.mark.parametrize("commande", [["cfe", "NaN"], ["tva", "2027", "Infinity"]])
    def test_montant_non_fini(self, chemins, commande: list[str]) -> None:
        """Montant non fini: code 1, configuration inchangee et relisible."""
        result = _invoquer(chemins, "config", *commande)
        assert result.exit_code == 1
        assert "montant invalide" in result.output
        config = charger_config(chemins[0])
        assert config.montant_cfe_estime == Decimal("800")
        assert config.tva_par_exercice == {2026: Decimal("12000")}
