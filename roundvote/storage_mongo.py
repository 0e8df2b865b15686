# roundvote/storage_mongo.py
import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from roundvote import config
from roundvote.core.rounds import ElectionRound
from roundvote.models.event_model import Notification

logger = logging.getLogger(__name__)


class RoundDocuments(NamedTuple):
    round_doc: Dict[str, Any]
    candidate_docs: List[Dict[str, Any]]
    voter_docs: List[Dict[str, Any]]


class RoundArchive:
    """
    Snapshot rounds into MongoDB.

    Layout per round: one document in `rounds` (metadata plus the used
    party names and identity tokens), one document per candidate in
    `candidates`, one per voter account in `voters`. After each committed
    mutation only the round document and the records that mutation touched
    are upserted.
    """

    def __init__(self, db):
        self.rounds = db[config.ROUNDS_COLLECTION_NAME]
        self.candidates = db[config.CANDIDATES_COLLECTION_NAME]
        self.voters = db[config.VOTERS_COLLECTION_NAME]

    def documents(
        self,
        election_round: ElectionRound,
        candidate_ids: Iterable[int] = (),
        accounts: Iterable[str] = (),
    ) -> RoundDocuments:
        """Build the documents to write; call while the round cannot change."""
        round_id = election_round.round_id
        round_doc = election_round.metadata.model_dump(mode="json")
        round_doc["_id"] = round_id
        round_doc["used"] = election_round.eligibility.snapshot()

        candidate_docs = []
        for candidate_id in candidate_ids:
            candidate = election_round.candidates.find(candidate_id)
            if candidate is None:
                continue
            doc = candidate.model_dump(mode="json")
            doc["_id"] = f"{round_id}:{candidate_id}"
            doc["round_id"] = round_id
            candidate_docs.append(doc)

        voter_docs = []
        for account in accounts:
            voter = election_round.voters.get(account)
            if voter is None:
                continue
            doc = voter.model_dump(mode="json")
            doc["_id"] = f"{round_id}:{account}"
            doc["round_id"] = round_id
            voter_docs.append(doc)
        return RoundDocuments(round_doc, candidate_docs, voter_docs)

    def write(self, docs: RoundDocuments) -> None:
        self.rounds.replace_one({"_id": docs.round_doc["_id"]}, docs.round_doc, upsert=True)
        for doc in docs.candidate_docs:
            self.candidates.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        for doc in docs.voter_docs:
            self.voters.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        logger.info(
            f"Round {docs.round_doc['_id']} archived "
            f"({len(docs.candidate_docs)} candidates, {len(docs.voter_docs)} voters)"
        )

    def save_round(
        self,
        election_round: ElectionRound,
        candidate_ids: Optional[Iterable[int]] = None,
        accounts: Optional[Iterable[str]] = None,
    ) -> None:
        """Write the round document plus the given records; None means every record."""
        if candidate_ids is None:
            candidate_ids = [c.candidate_id for c in election_round.candidates.list()]
        if accounts is None:
            accounts = [v.account for v in election_round.voters.list()]
        self.write(self.documents(election_round, candidate_ids, accounts))

    def delete_candidate(self, round_id: int, candidate_id: int) -> None:
        self.candidates.delete_one({"_id": f"{round_id}:{candidate_id}"})

    def load_round_document(self, round_id: int) -> Optional[Dict[str, Any]]:
        return self.rounds.find_one({"_id": round_id})


class MongoEventLog:
    """EventBus subscriber writing notifications into the logs collection."""

    def __init__(self, db):
        self.collection = db[config.LOGS_COLLECTION_NAME]

    def __call__(self, note: Notification) -> None:
        self.collection.insert_one(note.model_dump(mode="json"))
