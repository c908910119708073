"""Adaptadores de infraestructura (Solana RPC, Pinata, keypair, exportación)."""
