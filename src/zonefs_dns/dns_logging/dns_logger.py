"""
DNS Request Logging

Per-datagram query logging with the questions asked, the answers served and
the processing time.
"""

import time
from typing import List, Optional, Sequence, Tuple

import structlog

from ..core.message import Answer, Question
from ..core.records import DNSRecordType, describe_rdata, type_name
from .logger import get_logger


def format_questions(questions: Sequence[Question]) -> List[str]:
    """Format questions as "name TYPE" strings."""
    return [f"{q.name} {_type_label(q.qtype)}" for q in questions]


def format_response_data(answers: Sequence[Answer]) -> List[str]:
    """Format answer records as "name TYPE ttl rdata" strings."""
    return [
        f"{a.question.name} {_type_label(a.rtype)} {a.ttl} "
        f"{describe_rdata(a.rtype, a.rdata)}"
        for a in answers
    ]


def _type_label(rtype: int) -> str:
    name = type_name(rtype)
    if name.isdigit():
        return "ANY" if rtype == DNSRecordType.ANY else f"TYPE{rtype}"
    return name


class DNSRequestLogger:
    """DNS request/response logger with structured output."""

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self.logger = logger or get_logger("dns_requests")

    def start_request(self) -> float:
        """Get the start timestamp for a request."""
        return time.perf_counter()

    def log_request(
        self,
        client: Optional[Tuple[str, int]],
        started: float,
        questions: Sequence[Question],
        answers: Sequence[Answer],
        answered: bool,
        error: Optional[str] = None,
    ) -> None:
        """Log one processed datagram.

        Args:
            client: Client address
            started: Value returned by start_request()
            questions: Decoded questions (empty for dropped requests)
            answers: Answers that were sent
            answered: Whether a response was sent
            error: Reason the request was dropped, if it was
        """
        response_time_ms = (time.perf_counter() - started) * 1000
        fields = {
            "client_ip": client[0] if client else None,
            "questions": format_questions(questions),
            "answer_count": len(answers),
            "response_data": format_response_data(answers),
            "response_time_ms": round(response_time_ms, 2),
        }

        if answered:
            self.logger.info("DNS query processed", **fields)
        else:
            self.logger.info("DNS query dropped", error=error, **fields)
