"""
Pipeline modules for the query-time RAG chain.

Stage 1: Query Understanding  (intent.py)
Stage 2: Retrieval            (retrieval.py, deduplicator.py)
Stage 3: Response Synthesis   (response_generator.py, prompts/)

Orchestrated by: orchestrator.py
"""
