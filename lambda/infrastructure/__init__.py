"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas de repositórios e serviços externos
"""
