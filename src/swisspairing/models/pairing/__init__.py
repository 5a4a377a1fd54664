from swisspairing.models.pairing.pairing_result import Pairing, PairingResult

__all__ = ["Pairing", "PairingResult"]
