"""fuzzoracle: deterministic arbitrary values for smart contract test harnesses."""

from fuzzoracle.fuzzer.context import Cheatcodes, GenerationContext

__version__ = "0.1.0"

__all__ = ["Cheatcodes", "GenerationContext", "__version__"]
