"""Helpers for capturing, filtering, rewriting and replaying HTTP traffic: byte editing,
modifier options, BPF filters, capture engines, pcap writing, rate limiting, statistics,
Kafka messages and Elasticsearch URIs."""

__version__ = "0.1.0"