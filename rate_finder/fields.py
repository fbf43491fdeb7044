"""
Field declarations for the rate sheet and the auxiliary sheets.

Each logical column is declared once with the header texts it is known by.
Aliases are matched exactly (after key normalization); fallback tokens are
matched as substrings of the normalized header when no alias hits, which is
what lets decorated headers like "40HQ ALL IN" or "40HC (USD)" resolve.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AliasFamily:
    aliases: tuple[str, ...]
    fallback_tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    """
    One logical field of the rate schema.

    Attributes:
        name: Attribute name on RateRecord
        label: Column title used when rendering
        families: Alias families tried in order. Exact aliases of all
            families are checked before any fallback tokens. A row takes the
            first non-empty cell among the columns the families resolve to.
    """
    name: str
    label: str
    families: tuple[AliasFamily, ...]


# =============================================================================
# Header row detection
# =============================================================================

ORIGIN_SYNONYMS = ("pol", "puerto de embarque", "puerto embarque", "puerto origen", "origen")
DESTINATION_SYNONYMS = ("pod", "puerto de destino", "puerto destino", "destino")


# =============================================================================
# Rate sheet schema
# =============================================================================

_40_HC = AliasFamily(
    aliases=("40HC", "40 HC", "40'HC", "40' HC", "40FT HC"),
    fallback_tokens=("40", "hc"),
)
_40_HQ = AliasFamily(
    aliases=("40HQ", "40 HQ", "40'HQ", "40' HQ", "40FT HQ"),
    fallback_tokens=("40", "hq"),
)

RATE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        name="origin",
        label="POL",
        families=(AliasFamily(("POL", "PUERTO DE EMBARQUE", "PUERTO EMBARQUE", "PUERTO ORIGEN", "ORIGEN"), ("pol",)),),
    ),
    FieldSpec(
        name="destination",
        label="POD",
        families=(AliasFamily(("POD", "PUERTO DE DESTINO", "PUERTO DESTINO", "DESTINO"), ("pod",)),),
    ),
    FieldSpec(
        name="nor",
        label="NOR",
        families=(AliasFamily(("NOR", "NON OPERATIVE REEFER", "NON OPPERATIVE REEFER"), ("nor",)),),
    ),
    FieldSpec(
        name="rate_20",
        label="20GP",
        families=(AliasFamily(("20GP", "20 GP", "20'GP", "20'", "20FT", "20 FT"), ("20", "gp")),),
    ),
    # HC and HQ name the same 40' high cube box; sheets use either.
    FieldSpec(name="rate_40", label="40HC", families=(_40_HC, _40_HQ)),
    FieldSpec(
        name="validity",
        label="Validez",
        families=(AliasFamily(("VALIDEZ", "VALIDEZ TARIFA", "VALIDITY", "VALID"), ("validez",)),),
    ),
    FieldSpec(
        name="free_days",
        label="Dias libres",
        families=(AliasFamily(("DIAS LIBRES", "DÍAS LIBRES", "DIAS LIBRES DESTINO", "FREE DAYS"), ("dias", "libres")),),
    ),
    FieldSpec(
        name="carrier",
        label="Naviera",
        families=(AliasFamily(("NAVIERA", "LINEA", "LÍNEA", "CARRIER"), ("naviera",)),),
    ),
    FieldSpec(
        name="agent",
        label="Agente",
        families=(
            AliasFamily(
                ("AGENTE", "AGENTE ORIGEN", "FREIGHT FORWARDER", "FORWARDER", "EMBARCADOR", "SHIPPER AGENT"),
                ("agente",),
            ),
        ),
    ),
)


# =============================================================================
# Local charges sheet (column names matched as-is, first present wins)
# =============================================================================

CONCEPT_COLUMNS = ("Concepto", "CONCEPTO", "concepto")
DETAIL_COLUMNS = ("Detalle", "DETALLE", "detalle")
CALCULATION_COLUMNS = ("Cálculo", "CÁLCULO", "CALCULO", "calculo", "cálculo")
TAX_COLUMNS = ("IVA", "iva", "+ IVA", "+iva", "APLICA IVA", "Aplica IVA", "IMPUTA IVA", "Imputa IVA")
