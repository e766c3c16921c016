"""
Sync one-way de algoritmos de speedcubing: CSV -> bases de datos de Notion.
"""
