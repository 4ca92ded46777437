"""
Core primitives: hashing, Merkle tree construction, schemas and configuration.
"""
