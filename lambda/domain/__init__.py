"""Domain Layer - entidades, value objects, specifications e eventos"""
