# pretty print display stuff for the preview client

RESET = '\033[0m'
BOLD = '\033[1m'

FOIL_COLORS = {
    'Prize': '\033[33m',     # yellow
    'Standard': '\033[36m',  # cyan
    'None': '\033[37m',
}


def print_info(message: str):
    print(f"[INFO]: {message}")


def print_border():
    print("=" * 40)
    print()


def print_traits(data: dict):
    color = FOIL_COLORS.get(data.get('foil'), RESET)
    print_border()
    print(f"{BOLD}VibeFID #{data.get('fid')}{RESET}")
    print(f"  Foil: {color}{data.get('foil')}{RESET}")
    print(f"  Wear: {data.get('wear')}")
    if not data.get('deterministic', True):
        print("  (reroll preview - not what will be minted)")
    print_border()


def print_odds(title: str, odds: list):
    print(f"{title}:")
    for row in odds:
        bar = "#" * (row['weight'] // 5)
        print(f"  {row['value']:<18} {row['weight']:>3}% {bar}")


def print_card(card: dict):
    print_border()
    print(f"{BOLD}{card.get('display_name')} (@{card.get('username')}){RESET}")
    for key in ('fid', 'rarity', 'foil', 'wear', 'power', 'suit', 'rank', 'neynar_score'):
        print(f"  {key:<13} {card.get(key)}")
    print_border()
