"""
Rerank metrics: measure how a reranking provider changes precision@5 and latency
compared to a lexical baseline.
"""
