from contact_dedupe.steps.cleanup import normalize
from contact_dedupe.steps.matcher import PairwiseMatcher
from contact_dedupe.steps.policies import ExactFieldPolicy, FuzzyFieldPolicy, default_policies
from contact_dedupe.steps.similarity import levenshtein, similarity

__all__ = [
    "normalize",
    "PairwiseMatcher",
    "ExactFieldPolicy",
    "FuzzyFieldPolicy",
    "default_policies",
    "levenshtein",
    "similarity",
]
