#!/usr/bin/env python3
# src/maskvis/core/domain/models/atom_identity_index.py

"""
Bidirectional mapping between the two atom numbering schemes.

The structure library numbers atoms one way (scheme A, ``Atom.index``) and
the serialized PDBQT text another (scheme B, the record serial number).
Coordinates are the only key both share, so every lookup goes through the
spatial key of an atom.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .prepared_molecule import MoleculeRole, PreparedMolecule
from ...utils.pdbqt_records import (
    coordinates,
    iter_atom_records,
    serial_number,
    spatial_key,
)

logger = logging.getLogger(__name__)


@dataclass
class _MoleculeMaps:
    key_to_index: Dict[str, int] = field(default_factory=dict)
    index_to_key: Dict[int, str] = field(default_factory=dict)
    key_to_serial: Dict[str, int] = field(default_factory=dict)
    serial_to_key: Dict[int, str] = field(default_factory=dict)
    key_to_coordinates: Dict[str, Tuple[float, float, float]] = field(
        default_factory=dict
    )
    record_keys: List[str] = field(default_factory=list)
    record_key_set: Set[str] = field(default_factory=set)


class AtomIdentityIndex:
    """Spatial-key index over the receptor and ligand of one session.

    Maps are built on first use and reused afterwards. Lookups of atoms the
    index does not track return None; callers treat that as "atom not
    present".
    """

    def __init__(self, receptor: PreparedMolecule, ligand: PreparedMolecule):
        self._molecules = {
            MoleculeRole.RECEPTOR: receptor,
            MoleculeRole.LIGAND: ligand,
        }
        self._maps: Dict[MoleculeRole, _MoleculeMaps] = {}

    @property
    def is_built(self) -> bool:
        return bool(self._maps)

    def build(self) -> None:
        """Build the maps for both molecules; no-op when already built."""
        if self.is_built:
            return
        for role, molecule in self._molecules.items():
            self._maps[role] = self._index_molecule(molecule)
            logger.debug(
                "Indexed %d %s atom records",
                len(self._maps[role].record_keys),
                role.value,
            )

    @staticmethod
    def _index_molecule(molecule: PreparedMolecule) -> _MoleculeMaps:
        maps = _MoleculeMaps()

        for line in iter_atom_records(molecule.pdbqt):
            key = spatial_key(line)
            maps.record_keys.append(key)
            maps.record_key_set.add(key)
            try:
                maps.key_to_coordinates[key] = coordinates(line)
            except ValueError:
                logger.debug("Unreadable coordinates in record %r", line)
            serial = serial_number(line)
            if serial is not None:
                maps.key_to_serial[key] = serial
                maps.serial_to_key[serial] = key

        for atom in molecule.graph.atoms:
            key = atom.spatial_key
            maps.key_to_index[key] = atom.index
            maps.index_to_key[atom.index] = key

        return maps

    def _maps_for(self, role: MoleculeRole) -> _MoleculeMaps:
        self.build()
        return self._maps[role]

    def key_for_index(self, index: int, role: MoleculeRole) -> Optional[str]:
        """Spatial key of a library (scheme A) atom index."""
        return self._maps_for(role).index_to_key.get(index)

    def index_for_key(self, key: str, role: MoleculeRole) -> Optional[int]:
        """Library (scheme A) atom index for a spatial key."""
        return self._maps_for(role).key_to_index.get(key)

    def key_for_serial(self, serial: int, role: MoleculeRole) -> Optional[str]:
        """Spatial key of a serialized record (scheme B) serial number."""
        return self._maps_for(role).serial_to_key.get(serial)

    def serial_for_key(self, key: str, role: MoleculeRole) -> Optional[int]:
        """Serialized record (scheme B) serial number for a spatial key."""
        return self._maps_for(role).key_to_serial.get(key)

    def coordinates_for_key(
        self, key: str, role: MoleculeRole
    ) -> Optional[Tuple[float, float, float]]:
        return self._maps_for(role).key_to_coordinates.get(key)

    def has_record(self, key: str, role: MoleculeRole) -> bool:
        """Whether a serialized atom record carries this key."""
        return key in self._maps_for(role).record_key_set

    def record_keys(self, role: MoleculeRole) -> List[str]:
        """Spatial keys of all serialized atom records, in file order."""
        return list(self._maps_for(role).record_keys)

    def is_hydrogen(self, key: str, role: MoleculeRole) -> Optional[bool]:
        """Whether the atom behind a key is a hydrogen; None if untracked."""
        index = self.index_for_key(key, role)
        if index is None:
            return None
        atom = self._molecules[role].graph.get_atom(index)
        return atom.is_hydrogen if atom is not None else None
