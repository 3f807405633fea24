# mentor_pairing/utils/response_enricher.py
from typing import List
from ..models import Pairing
from ..schemas import PairingResponse, PairingActionResponse

class ResponseEnricher:
    @staticmethod
    def enrich_pairings(pairings: List[Pairing]) -> List[PairingResponse]:
        """Fills missing display handles with readable fallbacks"""
        enriched = []
        for pairing in pairings:
            response = PairingResponse.model_validate(pairing)
            if not response.mentor_handle:
                response.mentor_handle = f"Mentor {pairing.mentor_id}"
            if not response.student_handle:
                response.student_handle = f"Student {pairing.student_id}"
            enriched.append(response)
        return enriched

    @staticmethod
    def action_response(pairing: Pairing) -> PairingActionResponse:
        """Builds the dispatcher's success body for a pairing that was just written"""
        detail = ResponseEnricher.enrich_pairings([pairing])[0]
        return PairingActionResponse(status=detail.status, pairing_id=detail.id, pairing=detail)
