from watchdiff.stream.decoder import DecodedDocument, StreamDecoder, iter_documents, scan_object

__all__ = ["DecodedDocument", "StreamDecoder", "iter_documents", "scan_object"]
