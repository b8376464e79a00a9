# Fichier: constants.py
# Taux annuels exprimés en fraction du prix (ou du capital) sauf mention contraire.

TAUX_NOTAIRE_ANCIEN = 0.08
TAUX_NOTAIRE_NEUF = 0.03
TAUX_TAXE_FONCIERE = 0.007          # du prix/an
CHARGES_COPRO_M2 = 25.0             # €/m²/an
TAUX_ASSURANCE_PNO = 0.002          # du prix/an
TAUX_ENTRETIEN = 0.01               # du prix/an
TAUX_ASSURANCE_EMPRUNTEUR = 0.003   # du capital emprunté/an
RATIO_LOYER_PRIX = 0.004            # loyer mensuel ≈ 0.4% du prix
TAUX_ENDETTEMENT_MAX = 0.35         # plafond HCSF

# SCPI
PRIX_PART_SCPI = 200.0              # € par part
ASSURANCE_SCPI_PCT = 0.3            # % annuel, assurance emprunteur du crédit SCPI
DUREE_CREDIT_SCPI_LEGACY_ANS = 25   # durée utilisée par le calcul historique à partir de l'effort

DEFAULTS = {
    "prix_bien": 250000.0,
    "apport": 25000.0,
    "taux_credit": 3.5,
    "duree_credit": 20,
    "surface": 60.0,
    "is_neuf": False,
    "taux_revalorisation": 2.0,
    "augmentation_loyer": 1.0,
    "revenus_mensuels": 3000.0,
    "charges_credits": 0.0,
    "is_residence_principale": True,
}
