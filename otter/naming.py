"""
Naming conventions used to map resource classes to routes and back:

    UserAddress <=> user_addresses

Only the last word of a compound name is inflected, as in "user_addresses" -> "UserAddress".
Inflection is performed by the `inflect` engine, irregular nouns follow its word lists.
"""
import re
import inflect

_inflector = inflect.engine()

# an uppercase letter that isn't at the start of a word
INTERIOR_CAPITAL = re.compile(r"\B([A-Z])")
# everything up to and including the last namespace separator
NAMESPACE_PREFIX = re.compile(r".*(\\|/|\.)")


def _match_case(word: str, inflected: str) -> str:
    if word[:1].isupper():
        return inflected[:1].upper() + inflected[1:]
    return inflected


def pluralize(word: str) -> str:
    """
    :param word: singular noun, eg. "address"
    :return: plural form, eg. "addresses"
    """
    if not word:
        return word
    return _match_case(word, _inflector.plural_noun(word.lower()))


def singularize(word: str) -> str:
    """
    :param word: plural noun, eg. "addresses"
    :return: singular form, eg. "address". The word is returned unchanged if it's already singular
    """
    if not word:
        return word
    singular = _inflector.singular_noun(word.lower())
    if not singular:
        return word
    return _match_case(word, singular)


def _inflect_last(words: list, inflection) -> list:
    if not words:
        return words
    return words[:-1] + [inflection(words[-1])]


def class_name_from_route_name(route_name: str) -> str:
    """
    Retrieve the class name from a route name

    user_addresses => UserAddress
    """
    words = [word[:1].upper() + word[1:] for word in route_name.split("_") if word]
    return "".join(_inflect_last(words, singularize))


def route_name_from_class_name(class_name: str) -> str:
    """
    Get the route name from a class name

    UserAddress => user_addresses
    """
    words = snake_case(class_name).split("_")
    return "_".join(_inflect_last(words, pluralize))


def base_class_name(class_name: str) -> str:
    """
    Get the base class name from a fully qualified class name

    App\\Otter\\UserAddress, app/otter/UserAddress, app.otter.UserAddress => UserAddress
    """
    return NAMESPACE_PREFIX.sub("", class_name)


def pretty_name(class_name: str, plural: bool = True) -> str:
    """
    Human readable name of a resource class

    UserAddress => User Addresses (or User Address if plural is False)
    """
    words = INTERIOR_CAPITAL.sub(r" \1", class_name).split(" ")
    if plural:
        words = _inflect_last(words, pluralize)
    return " ".join(words)


def snake_case(class_name: str) -> str:
    """
    UserAddress => user_address
    """
    return INTERIOR_CAPITAL.sub(r"_\1", class_name).lower()
