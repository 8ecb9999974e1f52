"""Domain value objects"""
