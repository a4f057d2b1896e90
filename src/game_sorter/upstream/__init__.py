"""
Access to the upstream game catalogs: contracts, clients and utilities.
"""
