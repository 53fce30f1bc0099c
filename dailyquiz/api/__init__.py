from .opentdb import OPENTDB_ENDPOINT, decode_results, fetch_questions

__all__ = ["OPENTDB_ENDPOINT", "decode_results", "fetch_questions"]
