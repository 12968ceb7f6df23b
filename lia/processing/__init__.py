"""Processing collaborators for stages 2-5 and 7 of the interaction pipeline."""
from lia.processing.consciousness import ConsciousnessField
from lia.processing.neural import NeuralMatrix, PATTERN_VOCABULARY
from lia.processing.quantum import QuantumCore, shannon_entropy
from lia.processing.synthesis import ResponseSynthesizer
from lia.processing.thought import QuantumThoughtProcessor

__all__ = [
    "ConsciousnessField",
    "NeuralMatrix",
    "PATTERN_VOCABULARY",
    "QuantumCore",
    "QuantumThoughtProcessor",
    "ResponseSynthesizer",
    "shannon_entropy",
]
