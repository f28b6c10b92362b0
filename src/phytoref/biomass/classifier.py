# src/phytoref/biomass/classifier.py
"""Assign sample records to phytoplankton taxon groups.

Each record maps to at most one TaxonGroup, or to none. Rules are evaluated
in a fixed precedence:

1. phylum is the diatom phylum                     -> Diatoms
2. phylum is the cyanobacteria phylum              -> Cyanobacteria
3. scientific name is the Mesodinium species       -> Mesodinium rubrum
4. phylum is the dinoflagellate phylum and the
   trophic type is autotrophic or mixotrophic      -> Dinoflagellates

A disabled group keeps its rule, but the rule's match name is replaced by a
sentinel that no record carries, so it never fires. Disabling a group
therefore only shrinks the grouped population; the full population is
unaffected because it never consults the classifier.
"""

import logging
from typing import TYPE_CHECKING, Mapping, Optional

import numpy as np
import pandas as pd

from phytoref.biomass.records import TaxonGroup

if TYPE_CHECKING:
    from phytoref.schemas import InternalConfig

__all__ = ['TaxonClassifier']

logger = logging.getLogger(__name__)

# Never equal to a real taxon name
_UNMATCHED = "\x00unmatched-taxon\x00"


class TaxonClassifier:
    """Config-driven taxon group classifier.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration. Uses the ``selection``
        toggles and the ``taxonomy`` names.

    Examples
    --------
    >>> classifier = TaxonClassifier(config)
    >>> classifier.classify({"phylum": "Bacillariophyta", "scientific_name": "Skeletonema",
    ...                      "trophic_type": "AU"})
    <TaxonGroup.DIATOMS: 'Diatoms'>
    """

    def __init__(self, config: "InternalConfig"):
        selection = config.selection
        taxonomy = config.taxonomy

        # (group, field, match name, trophic restriction)
        self.rules = [
            (
                TaxonGroup.DIATOMS,
                "phylum",
                taxonomy.diatom_phylum if selection.include_diatoms else _UNMATCHED,
                None,
            ),
            (
                TaxonGroup.CYANOBACTERIA,
                "phylum",
                taxonomy.cyanobacteria_phylum if selection.include_cyanobacteria else _UNMATCHED,
                None,
            ),
            (
                TaxonGroup.MESODINIUM_RUBRUM,
                "scientific_name",
                taxonomy.mesodinium_species if selection.include_mesodinium_rubrum else _UNMATCHED,
                None,
            ),
            (
                TaxonGroup.DINOFLAGELLATES,
                "phylum",
                taxonomy.dinoflagellate_phylum if selection.include_dinoflagellates else _UNMATCHED,
                frozenset(code.upper() for code in taxonomy.dinoflagellate_trophic_types),
            ),
        ]
        self.enabled_groups = [
            group for group, _, name, _ in self.rules if name != _UNMATCHED
        ]

        logger.debug(
            "TaxonClassifier initialized: enabled=%s",
            [str(g) for g in self.enabled_groups],
        )

    def classify(self, record: Mapping) -> Optional[TaxonGroup]:
        """Classify a single record.

        Parameters
        ----------
        record : mapping
            Anything indexable by ``phylum``, ``scientific_name`` and
            ``trophic_type`` (dict, pandas Series, ...).

        Returns
        -------
        TaxonGroup or None
            The first matching group in precedence order, or None.
        """
        for group, field, name, trophic_types in self.rules:
            if _clean(record[field]) != name:
                continue
            if trophic_types is not None and _clean(record["trophic_type"]).upper() not in trophic_types:
                continue
            return group
        return None

    def classify_frame(self, df: pd.DataFrame) -> pd.Series:
        """Vectorised classify() over a record table.

        Returns
        -------
        pd.Series
            Group label (string value of TaxonGroup) per row, or None where
            no rule matched. Index aligned with ``df``.
        """
        conditions = []
        choices = []
        trophic = df["trophic_type"].fillna("").astype(str).str.strip().str.upper()
        for group, field, name, trophic_types in self.rules:
            match = df[field].fillna("").astype(str).str.strip() == name
            if trophic_types is not None:
                match &= trophic.isin(trophic_types)
            conditions.append(match.to_numpy())
            choices.append(group.value)

        if len(df) == 0:
            return pd.Series([], index=df.index, dtype=object, name="taxa")

        labels = np.select(conditions, choices, default="")
        taxa = pd.Series(labels, index=df.index, dtype=object, name="taxa")
        return taxa.where(taxa != "", None)


def _clean(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()
