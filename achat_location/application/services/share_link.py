"""Link sharing of simulation parameters.

Parameters travel as a compact query string (``px=250000&ap=25000&...``).
The encoding belongs to the sharing layer, not to the engine, and older
links must keep decoding: unknown keys are ignored and missing keys fall
back to the defaults.
"""

from __future__ import annotations

import math
from urllib.parse import parse_qsl, urlencode

from achat_location.core.constants import DEFAULTS, RATIO_LOYER_PRIX
from achat_location.core.exceptions import ShareLinkError
from achat_location.core.logging import get_logger
from achat_location.domain.models.params import AchatParams, LocationParams, SimulationParams

log = get_logger(__name__)

# Key order of the encoded string
KEYS = ("px", "ap", "tc", "dc", "sf", "nf", "rv", "ly", "al", "ai", "hz", "rm", "cc", "rp")

# Flat yield of the historical single-placement links
LEGACY_YIELD_KEY = "pl"


def _fmt(value: float) -> str:
    """Shortest text for a number: integers without a trailing '.0'."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def encode_params(params: SimulationParams) -> str:
    """Encode a parameter set as a query string (without the leading '?')."""
    achat, location = params.achat, params.location
    values = [
        achat.prix_bien, achat.apport, achat.taux_credit, achat.duree_credit,
        achat.surface, 1 if achat.is_neuf else 0, achat.taux_revalorisation,
        location.loyer_mensuel, location.augmentation_loyer,
        location.apport_investi, params.horizon_ans,
        params.revenus_mensuels, params.charges_credits,
        1 if achat.is_residence_principale else 0,
    ]
    pairs = [(k, _fmt(v)) for k, v in zip(KEYS, values)]
    if location.rendement_placement is not None:
        pairs.append((LEGACY_YIELD_KEY, _fmt(location.rendement_placement)))
    return urlencode(pairs)


def decode_params(query: str) -> SimulationParams | None:
    """Decode a shared query string.

    Args:
        query: Query string, with or without the leading '?'

    Returns:
        Parameters, or None when the string carries no price (not a share link)

    Raises:
        ShareLinkError: if a known key holds a non-numeric or non-finite
            value, or a fractional loan term or horizon
    """
    if not query:
        return None

    raw = dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))

    def g(key: str) -> float | None:
        if key not in raw:
            return None
        try:
            value = float(raw[key])
        except ValueError:
            raise ShareLinkError(key, raw[key], "not a number") from None
        if not math.isfinite(value):
            raise ShareLinkError(key, raw[key], "not a finite number")
        return value

    def g_int(key: str) -> int | None:
        value = g(key)
        if value is None:
            return None
        if not value.is_integer():
            raise ShareLinkError(key, raw[key], "not a whole number")
        return int(value)

    px = g("px")
    if px is None:
        return None

    def or_default(key: str, default: float) -> float:
        value = g(key)
        return default if value is None else value

    ap = or_default("ap", DEFAULTS["apport"])
    ly = g("ly")
    ai = g("ai")
    dc = g_int("dc")
    hz = g_int("hz")

    params = SimulationParams(
        achat=AchatParams(
            prix_bien=px,
            apport=ap,
            taux_credit=or_default("tc", DEFAULTS["taux_credit"]),
            duree_credit=dc if dc is not None else DEFAULTS["duree_credit"],
            surface=or_default("sf", DEFAULTS["surface"]),
            is_neuf=g("nf") == 1,
            taux_revalorisation=or_default("rv", DEFAULTS["taux_revalorisation"]),
            is_residence_principale=or_default("rp", 1 if DEFAULTS["is_residence_principale"] else 0) == 1,
        ),
        location=LocationParams(
            loyer_mensuel=ly if ly is not None else px * RATIO_LOYER_PRIX,
            augmentation_loyer=or_default("al", DEFAULTS["augmentation_loyer"]),
            apport_investi=ai if ai is not None else ap,
            rendement_placement=g(LEGACY_YIELD_KEY),
        ),
        revenus_mensuels=or_default("rm", DEFAULTS["revenus_mensuels"]),
        charges_credits=or_default("cc", DEFAULTS["charges_credits"]),
        horizon_ans=hz if hz is not None else SimulationParams.defaults().horizon_ans,
    )
    log.debug("share_link_decoded", keys=sorted(raw))
    return params
