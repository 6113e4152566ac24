from cardvault.description.base_description import build_base_description
from cardvault.description.describer import Describer, DescriptionOutcome
from cardvault.description.writer import DescriptionWriter

__all__ = ["Describer", "DescriptionOutcome", "DescriptionWriter", "build_base_description"]
