import json
import os
import sys

from cheguordle.dictionary import DEFAULT_DICTIONARY_PATH, fold_accents, is_admissible, normalize_word


def build_word_map(raw_words):
    """
    Folds accents out of the raw words and keeps the ones the game can use.

    Args:
        raw_words (iterable): Lines of the raw word list.

    Returns:
        tuple: The mapping to serialize (word -> True) and the number of rejected entries.
    """
    words = {}
    rejected = 0
    for line in raw_words:
        word = normalize_word(fold_accents(line))
        if not word:
            continue
        if is_admissible(word):
            words[word] = True
        else:
            rejected += 1
    return dict(sorted(words.items())), rejected


def main():
    """
    Rebuilds the packaged word list from data/raw/palabras.txt.
    """
    SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
    PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, '..', '..'))

    input_filepath = os.path.join(PROJECT_ROOT, "data/raw/palabras.txt")
    output_filepath = str(DEFAULT_DICTIONARY_PATH)

    try:
        print(f"Loading raw words from '{input_filepath}'...")
        with open(input_filepath, 'r', encoding='utf-8') as f:
            word_map, rejected = build_word_map(f)
        print(f"Kept {len(word_map)} words, rejected {rejected} that are not 5 playable letters.")

        if not word_map:
            print("Error: No playable words found, refusing to write an empty dictionary.", file=sys.stderr)
            sys.exit(1)

        os.makedirs(os.path.dirname(output_filepath), exist_ok=True)
        with open(output_filepath, 'w', encoding='utf-8') as f:
            json.dump(word_map, f, indent=2, ensure_ascii=False)
            f.write("\n")
        print(f"Dictionary saved to '{output_filepath}'.")

    except FileNotFoundError:
        print(f"Error: Raw word list not found at '{input_filepath}'.", file=sys.stderr)
        sys.exit(1)
    except IOError as e:
        print(f"Error: An I/O error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
