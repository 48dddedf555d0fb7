"""Domain packages: customers, contracts, scheduling"""
