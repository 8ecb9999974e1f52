"""Domain entities"""
