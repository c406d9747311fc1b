"""Arbitrary-value oracle for smart contract fuzzing.

Implements deterministic arbitrary values with:
  - Seed management (fixed default, explicit reseed)
  - Width/range-bounded scalar generation
  - Lazily generated contract storage with explicit-write precedence
  - Arbitrary-mode registry per address
"""
