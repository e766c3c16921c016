"""
Integracion con Notion: bases de casos y de algs.

- notion_client: HTTP (httpx async, paginacion, backoff)
- property_mappers: registros <-> propiedades de pagina
- batching: lotes de tamaño fijo, requests en paralelo dentro del lote
- sync_gateway: implementacion de RemoteSyncClient
"""
