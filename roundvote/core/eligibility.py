from typing import Dict, List, Set


class EligibilityRegistry:
    """Used party names and identity tokens for one round."""

    def __init__(self):
        self._party_names: Set[str] = set()
        self._voter_identities: Set[str] = set()
        self._candidate_identities: Set[str] = set()

    # --- party names (exact, case-sensitive) ---
    def party_name_used(self, party_name: str) -> bool:
        return party_name in self._party_names

    def mark_party_name(self, party_name: str) -> None:
        self._party_names.add(party_name)

    def release_party_name(self, party_name: str) -> None:
        self._party_names.discard(party_name)

    # --- identity tokens used for voter registration ---
    def identity_used(self, identity: str) -> bool:
        return identity in self._voter_identities

    def mark_identity(self, identity: str) -> None:
        self._voter_identities.add(identity)

    # --- identity tokens used by candidates ---
    def candidate_identity_used(self, identity: str) -> bool:
        return identity in self._candidate_identities

    def mark_candidate_identity(self, identity: str) -> None:
        self._candidate_identities.add(identity)

    def snapshot(self) -> Dict[str, List[str]]:
        return {
            "party_names": sorted(self._party_names),
            "voter_identities": sorted(self._voter_identities),
            "candidate_identities": sorted(self._candidate_identities),
        }
