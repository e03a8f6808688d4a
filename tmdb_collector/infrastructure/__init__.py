"""
Couche infrastructure de TMDB Collector.

Ce module contient les implementations concretes des interfaces definies
dans la couche domaine (ports) :

- persistence/ : Stockage SQL avec SQLModel (modeles et repositories)

Architecture hexagonale : le repository recoit une session deja ouverte,
ce qui permet de changer de moteur (ex: PostgreSQL au lieu de SQLite)
ou de le remplacer par une base en memoire dans les tests.
"""
