"""Rule-based categorization of invoice line items.

Rules are checked top to bottom and the first pattern that matches the
lowercased description decides the category. Several rules carry a leading
negative lookahead (``^(?!.*\\b(...)\\b)``) so that a broad rule does not claim
items owned by a more specific one further down (ice-cream cones mentioning
"milk", chocolate wafers mentioning "wafer", ...). Keep the order: it is the
priority.
"""

import re
from typing import NamedTuple, Pattern


CATEGORIES = [
    'Fresh Produce – Fruits',
    'Fresh Produce – Vegetables & Herbs',
    'Staples & Pantry',
    'Spices, Condiments & Cooking Essentials',
    'Dairy & Eggs',
    'Bakery & Bread',
    'Snacks & Salty Snacks',
    'Confectionery & Sweet Tooth',
    'Frozen & Refrigerated Items',
    'Instant & Ready-to-Cook Foods',
    'Beverages & Drinks',
    'Tobacco & Related',
    'Household, Personal Care & Miscellaneous',
    'Charges & Fees',
    'Others',
]

FALLBACK_CATEGORY = 'Others'


class CategoryRule(NamedTuple):
    pattern: Pattern
    category: str


def _rule(regex, category):
    return CategoryRule(re.compile(regex, re.I), category)


RULES = [
    _rule(
        r'\b(apple|banana|mango|orange|grape|guava|guavas|berry|berries|watermelon|papaya|pineapple|kiwi|melon'
        r'|pomegranate|coconut|tender\s*coconut|fruit|fruits)\b',
        'Fresh Produce – Fruits',
    ),
    _rule(
        r'\b(onion|tomato|potato|carrot|capsicum|bell\s*pepper|cabbage|cauliflower|spinach|palak|methi|fenugreek'
        r'|beans|beans\s*haricot|okra|lady\s*finger|pea|peas|ginger|garlic|chilli|green\s*chilli|chilli\s*green'
        r'|mushroom|brinjal|lemon|drumsticks?|beetroot|fresh\s*produce|vegetable|vegetables|leafy\s*vegetable'
        r'|leaves|herb|herbs)\b',
        'Fresh Produce – Vegetables & Herbs',
    ),
    _rule(
        r'\b(rice|sonamasuri|poha|atta|flour|sooji|maida|dal|lentil|pulses|grain|grains|cereal|wheat|rice\s*flour'
        r'|gram\s*flour|kabuli\s*chana|kala\s*chana|chana|besan|pulse|peanut|peanuts|singdana|oil|sunflower\s*oil'
        r'|refined\s*oil|groundnut\s*oil|edible\s*oil|ghee|sugar|salt|jaggery)\b',
        'Staples & Pantry',
    ),
    _rule(
        r'^(?!.*\b(chip|chips|crisps|kurkure|nacho|namkeen|snack|salty\s*snack|popcorn|cracker|wafers?)\b)'
        r'.*?\b(spice|spices|masala|masalas|cumin|jeera|salt|pepper|seasoning|sauce|soy\s*sauce'
        r'|green\s*chilli\s*sauce|red\s*chilli\s*sauce|pickl(e|es)|pickle|pickle\s*jar|condiment|chutney|paste'
        r'|ginger\s*garlic\s*paste|gravy\s*mix|manchurian)\b',
        'Spices, Condiments & Cooking Essentials',
    ),
    _rule(
        r'^(?!.*\b(ice\s*cream|ice-cream|icecream|cornetto|popsicle|frozen\s*dessert|frozen|cone|choco|chocolate'
        r'|wafer|lindt|lindor|kitkat|munch|dukes|waffy|flavoured\s*milk|kool|cafe|coffee)\b)'
        r'.*?\b(milk|dairy|curd|yogurt|yoghurt|paneer|cheese|butter|cream|ghee|dahi|lassi|buttermilk'
        r'|condensed\s*milk|milk\s*powder)\b',
        'Dairy & Eggs',
    ),
    _rule(
        r'\b(bread|bun|buns|pav|croissant|bagel|bun\s*mask(a)?|pastry|bakery|loaf|roll(?![-\s]*on)\b|rolls)\b',
        'Bakery & Bread',
    ),
    _rule(
        r'^(?!.*\b(choco|chocolate|wafer\s*bar|choco\s*coated|lindt|lindor|kitkat|dukes|waffy)\b)'
        r'.*?\b(chip|chips|crisps|kurkure|nacho|namkeen|snack|salty\s*snack|popcorn|cracker|wafers?)\b',
        'Snacks & Salty Snacks',
    ),
    _rule(
        r'^(?!.*\b(cone)\b)'
        r'.*?\b(choco|chocolate|chocolates|candy|bubble\s*gum|gum|sweets?|dessert|lindt|lindor|kitkat'
        r'|nestle\s*munch|dukes|waffy|cookie|cookies|biscuit|biscuits|wafer|wafers|waffle|croissant|cake'
        r'|sweet\s*snack|sweet)\b',
        'Confectionery & Sweet Tooth',
    ),
    _rule(
        r'\b(ice\s*cream|ice\-cream|icecream|cornetto|popsicle|frozen\s*dessert|frozen|frozen\s*food|cone)\b',
        'Frozen & Refrigerated Items',
    ),
    _rule(
        r'\b(maggi|noodle|noodles|instant\s*(meal|meals|food|foods)|ramen|cup\s*noodles|ready[-\s]*to[-\s]*eat'
        r'|ready[-\s]*to[-\s]*cook|batter|meal\s*kit)\b',
        'Instant & Ready-to-Cook Foods',
    ),
    _rule(
        r'^(?!.*\b(instant\s*coffee|coffee\s*powder)\b)'
        r'.*?\b(juice|fruit\s*juice|soft\s*drink|cola|soda|mineral\s*water|bottled\s*water|cold\s*drink|drink'
        r'|beverage|energy\s*drink|tea|coffee|chai|tea\s*bag|milk\s*drink|flavoured\s*milk|health\s*drink)\b',
        'Beverages & Drinks',
    ),
    _rule(
        r'\b(cigarette|tobacco|cigar|pan|paan|supari|smoke|hookah|chewing\s*tobacco|rolling\s*paper|lighter'
        r'|classic\s*(?:refined\s*taste|ultra\s*mild)|\bgold\s*flake\b|\bmarlboro\b|\bwills\b|\bplayers\b'
        r'|\bstellar\s*define\b|\bmagnate\b|\bmagic\s*switch\b)\b',
        'Tobacco & Related',
    ),
    _rule(
        r'\b(bouquet|flower|flowers|gift|hygiene|cleaning|soap|detergent|shampoo|toothpaste|sanitary|pad|tray|tape'
        r'|bopp\s*tape|packet|box|packaging|wrap|misc|miscellaneous|incense|agarbatti|mangaldeep|facial|o3\+'
        r'|aroma\s*magic|bottle\s*brush|sponge|gloves?|garbage\s*bags?|roll[-\s]*on|science\s*kit|instant\s*coffee'
        r'|coffee\s*powder)\b',
        'Household, Personal Care & Miscellaneous',
    ),
    _rule(
        r'\b(convenience\s*charge|delivery\s*charge|service\s*charge|platform\s*fee|handling\s*charge)\b',
        'Charges & Fees',
    ),
    # catch-all, keeps categorize() total
    _rule(r'.*', FALLBACK_CATEGORY),
]


def first_match(rules, value, default=None, test=None):
    """Return the result of the first (predicate, result) pair that accepts ``value``.

    ``test`` adapts the predicate call; by default predicates are compiled
    patterns and are tried with ``search``.
    """
    for predicate, result in rules:
        ok = test(predicate, value) if test else predicate.search(value)
        if ok:
            return result
    return default


def categorize(description: str) -> str:
    text = (description or '').lower()
    if not text:
        return FALLBACK_CATEGORY
    return first_match(RULES, text, default=FALLBACK_CATEGORY)
