"""solcfg: build configuration resolver for Solidity toolchains."""

__version__ = "0.1.0"
