"""Node-backed features used while building transactions.

- namespace: alias lookups for addresses and mosaic ids
- multisig: multisig state of the signing account
- restriction: mosaic address restriction construction
"""
