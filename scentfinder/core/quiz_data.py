"""
Static quiz data: the zodiac table, default zodiac copy, and the default
catalog and question set used by the seed_quiz command.
"""

# Zodiac Signs
# start/end are (month, day); Capricorn wraps across the new year.
ZODIAC_SIGNS = [
    {'name': 'Aries', 'symbol': '♈', 'start': (3, 21), 'end': (4, 19), 'element': 'Fire'},
    {'name': 'Taurus', 'symbol': '♉', 'start': (4, 20), 'end': (5, 20), 'element': 'Earth'},
    {'name': 'Gemini', 'symbol': '♊', 'start': (5, 21), 'end': (6, 20), 'element': 'Air'},
    {'name': 'Cancer', 'symbol': '♋', 'start': (6, 21), 'end': (7, 22), 'element': 'Water'},
    {'name': 'Leo', 'symbol': '♌', 'start': (7, 23), 'end': (8, 22), 'element': 'Fire'},
    {'name': 'Virgo', 'symbol': '♍', 'start': (8, 23), 'end': (9, 22), 'element': 'Earth'},
    {'name': 'Libra', 'symbol': '♎', 'start': (9, 23), 'end': (10, 22), 'element': 'Air'},
    {'name': 'Scorpio', 'symbol': '♏', 'start': (10, 23), 'end': (11, 21), 'element': 'Water'},
    {'name': 'Sagittarius', 'symbol': '♐', 'start': (11, 22), 'end': (12, 21), 'element': 'Fire'},
    {'name': 'Capricorn', 'symbol': '♑', 'start': (12, 22), 'end': (1, 19), 'element': 'Earth'},
    {'name': 'Aquarius', 'symbol': '♒', 'start': (1, 20), 'end': (2, 18), 'element': 'Air'},
    {'name': 'Pisces', 'symbol': '♓', 'start': (2, 19), 'end': (3, 20), 'element': 'Water'},
]

ZODIAC_DESCRIPTIONS = {
    'Aries': "As an Aries, you're energetic, bold, and confident. Your scent should match your fiery personality.",
    'Taurus': "As a Taurus, you appreciate life's pleasures and comfort. Your scent reflects your grounded nature and appreciation for quality.",
    'Gemini': "As a Gemini, you're versatile and curious. Your scent matches your dynamic personality and love for variety.",
    'Cancer': "As a Cancer, you're nurturing and sensitive. Your scent embodies your caring nature and emotional depth.",
    'Leo': "As a Leo, you're warm-hearted and confident. Your scent captures your natural charisma and radiant personality.",
    'Virgo': "As a Virgo, you're practical and detail-oriented. Your scent reflects your refined taste and appreciation for subtle elegance.",
    'Libra': "As a Libra, you value harmony and beauty. Your scent embodies your natural sense of balance and aesthetic sensibility.",
    'Scorpio': "As a Scorpio, you're passionate and intense. Your scent captures your mysterious allure and emotional depth.",
    'Sagittarius': "As a Sagittarius, you're optimistic and freedom-loving. Your scent reflects your adventurous spirit and love for exploration.",
    'Capricorn': "As a Capricorn, you're ambitious and disciplined. Your scent embodies your sophisticated taste and timeless style.",
    'Aquarius': "As an Aquarius, you're innovative and independent. Your scent captures your unique personality and forward-thinking approach.",
    'Pisces': "As a Pisces, you're intuitive and dreamy. Your scent reflects your imaginative nature and emotional sensitivity.",
}

GENERIC_ZODIAC_DESCRIPTION = (
    'Your zodiac sign {sign} pairs beautifully with the {product} fragrance, creating a unique '
    'sensory experience that complements your natural traits.'
)

# Product catalog, in display order
DEFAULT_SCENTS = [
    {
        'id': 'atlantis',
        'name': 'Atlantis',
        'category': 'fresh',
        'mood': 'Deep blue calm with a salty edge.',
        'notes': ['sea salt', 'bergamot', 'driftwood'],
        'vibes': ['calm', 'free', 'clean'],
        'description': 'An aquatic scent for people who recharge by the water.',
    },
    {
        'id': 'feeling-good',
        'name': 'Feeling Good',
        'category': 'fresh',
        'mood': 'Sunshine in a bottle.',
        'notes': ['mandarin', 'neroli', 'white musk'],
        'vibes': ['cheerful', 'light', 'easy'],
        'description': 'Bright citrus for the eternal optimist.',
    },
    {
        'id': 'shelby',
        'name': 'Shelby',
        'category': 'woody',
        'mood': 'Tailored, smoky, a little dangerous.',
        'notes': ['tobacco', 'leather', 'vetiver'],
        'vibes': ['bold', 'classic', 'confident'],
        'description': 'A sharp woody leather for nights out.',
    },
    {
        'id': 'utopia',
        'name': 'Utopia',
        'category': 'floral',
        'mood': 'A daydream you never want to leave.',
        'notes': ['peony', 'pear', 'cashmere wood'],
        'vibes': ['dreamy', 'soft', 'romantic'],
        'description': 'A soft floral for the idealist.',
    },
    {
        'id': '1970',
        'name': '1970',
        'category': 'woody',
        'mood': 'Vinyl, velvet and old photographs.',
        'notes': ['patchouli', 'vanilla', 'amber'],
        'vibes': ['nostalgic', 'warm', 'artsy'],
        'description': 'A warm retro amber.',
    },
    {
        'id': 'royal',
        'name': 'Royal',
        'category': 'oriental',
        'mood': 'Gold leaf and candlelight.',
        'notes': ['oud', 'saffron', 'rose'],
        'vibes': ['luxurious', 'elegant', 'intense'],
        'description': 'A rich oud for grand entrances.',
    },
    {
        'id': 'garden-breeze',
        'name': 'Garden Breeze',
        'category': 'floral',
        'mood': 'Morning dew on cut grass.',
        'notes': ['green tea', 'jasmine', 'fig leaf'],
        'vibes': ['fresh', 'natural', 'gentle'],
        'description': 'A green floral that smells like a walk outside.',
    },
    {
        'id': 'revolt',
        'name': 'Revolt',
        'category': 'oriental',
        'mood': 'Loud music and spiced rum.',
        'notes': ['black pepper', 'cardamom', 'rum'],
        'vibes': ['rebellious', 'spicy', 'energetic'],
        'description': 'A spicy statement scent.',
    },
]

# Quiz Questions
# q1 is the root; its answer decides which branch follows.
DEFAULT_QUESTIONS = [
    {
        'id': 'q1',
        'text': 'Where would you rather spend a free Saturday?',
        'type': 'single_choice',
        'order': 1,
        'is_root': True,
        'options': [
            {'id': 'sea', 'text': 'By the sea', 'scent_weights': {'atlantis': 1}},
            {'id': 'city', 'text': 'Out in the city', 'scent_weights': {'shelby': 1}},
            {'id': 'garden', 'text': 'In a quiet garden', 'scent_weights': {'garden-breeze': 1}},
        ],
    },
    {
        'id': 'q2',
        'text': 'What are you doing by the water?',
        'type': 'single_choice',
        'order': 2,
        'parent_id': 'q1',
        'parent_option_id': 'sea',
        'options': [
            {'id': 'surf', 'text': 'Catching waves', 'scent_weights': {'atlantis': 3, 'revolt': 1}},
            {'id': 'read', 'text': 'Reading under an umbrella', 'scent_weights': {'feeling-good': 2, 'utopia': 1}},
            {'id': 'sunset', 'text': 'Waiting for the sunset', 'scent_weights': {'utopia': 2, 'atlantis': 1}},
        ],
    },
    {
        'id': 'q3',
        'text': 'Which of these do you pack?',
        'type': 'multi_choice',
        'order': 3,
        'parent_id': 'q1',
        'parent_option_id': 'sea',
        'options': [
            {'id': 'sunscreen', 'text': 'Coconut sunscreen', 'scent_weights': {'feeling-good': 1}},
            {'id': 'novel', 'text': 'A worn novel', 'scent_weights': {'1970': 1}},
            {'id': 'speaker', 'text': 'A loud speaker', 'scent_weights': {'revolt': 2}},
        ],
    },
    {
        'id': 'q4',
        'text': 'Pick your night out.',
        'type': 'single_choice',
        'order': 2,
        'parent_id': 'q1',
        'parent_option_id': 'city',
        'options': [
            {'id': 'jazz', 'text': 'A jazz bar', 'scent_weights': {'1970': 2, 'shelby': 1}},
            {'id': 'gala', 'text': 'A black tie gala', 'scent_weights': {'royal': 3}},
            {'id': 'gig', 'text': 'A punk gig', 'scent_weights': {'revolt': 3}},
        ],
    },
    {
        'id': 'q5',
        'text': 'How bold do you like your fragrance?',
        'type': 'scale',
        'order': 3,
        'parent_id': 'q1',
        'parent_option_id': 'city',
        'scale_config': {'min': 'Barely there', 'max': 'Fills the room', 'steps': 3},
        'options': [
            {'id': 's1', 'text': '1', 'value': 1, 'scent_weights': {'feeling-good': 1}},
            {'id': 's2', 'text': '2', 'value': 2, 'scent_weights': {'shelby': 1}},
            {'id': 's3', 'text': '3', 'value': 3, 'scent_weights': {'royal': 2}},
        ],
    },
    {
        'id': 'q6',
        'text': 'Which flowers would you plant?',
        'type': 'multi_choice',
        'order': 2,
        'parent_id': 'q1',
        'parent_option_id': 'garden',
        'options': [
            {'id': 'jasmine', 'text': 'Jasmine', 'scent_weights': {'garden-breeze': 2}},
            {'id': 'peony', 'text': 'Peonies', 'scent_weights': {'utopia': 2}},
            {'id': 'rose', 'text': 'Roses', 'scent_weights': {'royal': 1, 'utopia': 1}},
        ],
    },
    {
        'id': 'zodiac',
        'text': 'When is your birthday?',
        'type': 'zodiac_input',
        'order': 99,
        'options': [],
    },
]

# Hand-written pairings, keyed by sign then product id
DEFAULT_ZODIAC_MAPPINGS = {
    'Aries': {'revolt': 'Your Aries fire meets its match in the spice of Revolt.'},
    'Taurus': {'garden-breeze': 'Grounded Taurus finds its calm in the green notes of Garden Breeze.'},
    'Leo': {'royal': 'Leo was born for the spotlight, and Royal makes the entrance.'},
    'Pisces': {'atlantis': 'A water sign deserves the sea, and Atlantis brings it.'},
    'Libra': {'utopia': 'Libra seeks harmony, and Utopia is balance in a bottle.'},
}
