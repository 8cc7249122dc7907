"""
tokenvm.runtime — host side of the contract VM.

- journal:     per-call frame (staged writes + buffered events)
- storage_api: contract storage hooks
- events_api:  event validation and buffering
- hash_api:    keccak256 / sha3
- abi:         revert / require
- context:     address helpers, CallEnv
- loader:      module resolution and code hashing
- engine:      Engine, ContractInstance, Receipt
"""
