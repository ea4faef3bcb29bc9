"""
Zone Resolver

Answers the questions of a query from the zone store. Decoding and resolution
are interleaved: each question is looked up as soon as it has been decoded.
"""

import logging
from typing import List, Tuple

from .message import Answer, DNSHeader, Question, iter_questions, parse_header
from .zone import ZoneStore

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Authoritative-only resolver backed by a ZoneStore"""

    def __init__(self, zone_store: ZoneStore):
        self.zone_store = zone_store

    def resolve(self, question: Question) -> List[Answer]:
        """Get the answers for a single question"""
        records = self.zone_store.lookup(
            question.name, question.qtype, question.qclass
        )
        return [
            Answer(
                question=question,
                rtype=record.rtype,
                ttl=record.ttl,
                rdata=record.rdata,
            )
            for record in records
        ]

    def answer_query(
        self, data: bytes
    ) -> Tuple[DNSHeader, List[Question], List[Answer]]:
        """Decode a query and resolve its questions in order.

        Raises:
            MalformedMessageError: If the datagram is not a standard query
            InvalidNameError: If a question name cannot be decoded
        """
        header = parse_header(data)
        questions: List[Question] = []
        answers: List[Answer] = []

        for question in iter_questions(data, header):
            questions.append(question)
            found = self.resolve(question)
            logger.debug(
                f"Resolved {question.name} type {question.qtype}: "
                f"{len(found)} record(s)"
            )
            answers.extend(found)

        return header, questions, answers
