#!/usr/bin/env python3

import argparse

from textkit.document_index import DocumentIndex
from textkit.search_utils import DEFAULT_LSA_RANK, DEFAULT_SEARCH_LIMIT, LOG_LEVEL, configure_logging
from textkit.sentiment import default_lexicon
from textkit.stemmer import stem
from textkit.text_processing import sentence_split, tokenize, tokenize_and_stem


def load_index() -> DocumentIndex | None:
    index = DocumentIndex()
    try:
        index.load()
    except FileNotFoundError:
        print("Error: document index not found. Run 'build' first.")
        return None
    return index


def print_matrix(matrix, titles) -> None:
    for row, title in enumerate(titles):
        cells = "  ".join(f"{value:.2f}" for value in matrix[row])
        print(f"{row + 1}. {title[:24]:<24}  {cells}")


def main() -> None:
    # Define CLI subcommands and their arguments
    parser = argparse.ArgumentParser(description="Text Analysis CLI")
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL, help="Logging level (default: TEXTKIT_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    stem_parser = subparsers.add_parser("stem", help="Stem one or more words")
    stem_parser.add_argument("words", type=str, nargs="+", help="Words to stem")
    tokenize_parser = subparsers.add_parser("tokenize", help="Tokenize text, optionally stemming")
    tokenize_parser.add_argument("text", type=str, help="Text to tokenize")
    tokenize_parser.add_argument("--stem", action="store_true", help="Lowercase, drop stop words and stem")
    sentences_parser = subparsers.add_parser("sentences", help="Split text into sentences")
    sentences_parser.add_argument("text", type=str, help="Text to split")
    subparsers.add_parser("build", help="Build the document index")
    tf_parser = subparsers.add_parser("tf", help="Get term frequency")
    tf_parser.add_argument("doc_id", type=int, help="Document ID")
    tf_parser.add_argument("term", type=str, help="Search term")
    idf_parser = subparsers.add_parser("idf", help="Get inverse document frequency for a term")
    idf_parser.add_argument("term", type=str, help="Search term")
    tfidf_parser = subparsers.add_parser("tfidf", help="Get normalized TF-IDF weight")
    tfidf_parser.add_argument("doc_id", type=int, help="Document ID")
    tfidf_parser.add_argument("term", type=str, help="Search term")
    search_parser = subparsers.add_parser("search", help="Search documents by TF-IDF cosine similarity")
    search_parser.add_argument("query", type=str, help="Search query")
    search_parser.add_argument("--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Limit the number of results")
    subparsers.add_parser("similarity", help="Print the document cosine similarity matrix")
    lsa_parser = subparsers.add_parser("lsa", help="Print the LSA cosine similarity matrix")
    lsa_parser.add_argument("-k", type=int, default=DEFAULT_LSA_RANK, help=f"Rank of the projection (default: {DEFAULT_LSA_RANK})")
    similar_parser = subparsers.add_parser("similar", help="List documents most similar to a document")
    similar_parser.add_argument("doc_id", type=int, help="Document ID")
    similar_parser.add_argument("--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Limit the number of results")
    sentiment_parser = subparsers.add_parser("sentiment", help="Valence, arousal and description of a text")
    sentiment_parser.add_argument("text", type=str, help="Text to score")
    args = parser.parse_args()

    configure_logging(args.log_level)

    match args.command:
        case "stem":
            for word in args.words:
                print(f"{word} -> {stem(word)}")
        case "tokenize":
            tokens = tokenize_and_stem(args.text) if args.stem else tokenize(args.text)
            print(tokens)
        case "sentences":
            for i, sentence in enumerate(sentence_split(args.text), 1):
                print(f"{i}. {sentence}")
        case "build":
            index = DocumentIndex()
            index.build()
            index.save()
            print(f"Indexed {len(index.doc_ids)} documents with {index.matrix.n_terms} terms")
        case "tf":
            index = load_index()
            if index is None:
                return
            try:
                print(index.get_tf(args.doc_id, args.term))
            except (ValueError, IndexError) as e:
                print(f"Error: {e}")
        case "idf":
            index = load_index()
            if index is None:
                return
            try:
                idf = index.get_idf(args.term)
                print(f"Inverse document frequency of '{args.term}': {idf:.2f}")
            except ValueError as e:
                print(f"Error: {e}")
        case "tfidf":
            index = load_index()
            if index is None:
                return
            try:
                tf_idf = index.get_tfidf(args.doc_id, args.term)
                print(f"TF-IDF score of '{args.term}' in document '{args.doc_id}': {tf_idf:.2f}")
            except (ValueError, IndexError) as e:
                print(f"Error: {e}")
        case "search":
            index = load_index()
            if index is None:
                return
            print("Searching for:", args.query)
            results = index.search(args.query, limit=args.limit)
            for i, result in enumerate(results, 1):
                print(f"{i}. ({result['id']}) {result['title']} - Score: {result['score']:.4f}")
        case "similarity":
            index = load_index()
            if index is None:
                return
            print_matrix(index.similarity_matrix(), index.corpus.titles)
        case "lsa":
            index = load_index()
            if index is None:
                return
            try:
                print_matrix(index.lsa_similarity_matrix(args.k), index.corpus.titles)
            except ValueError as e:
                print(f"Error: {e}")
        case "similar":
            index = load_index()
            if index is None:
                return
            try:
                results = index.similar_documents(args.doc_id, limit=args.limit)
            except IndexError as e:
                print(f"Error: {e}")
                return
            for i, result in enumerate(results, 1):
                print(f"{i}. ({result['id']}) {result['title']} - Similarity: {result['score']:.4f}")
        case "sentiment":
            lexicon = default_lexicon()
            tokens = [token.lower() for token in tokenize(args.text)]
            sentiment = lexicon.sentiment_for_terms(tokens)
            print(f"Valence: {sentiment['valence']:.2f}")
            print(f"Arousal: {sentiment['arousal']:.2f}")
            print(f"Description: {lexicon.terms_description(tokens)}")
        case _:
            parser.print_help()


if __name__ == "__main__":
    main()
