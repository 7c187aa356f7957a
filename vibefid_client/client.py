import argparse
import json
import sys
import time

import requests

from vibefid_client.utils.pretty_display import print_info, print_traits, print_odds, print_card
from vibefid_server import config
from vibefid_server.card_utils.fid_traits import get_fid_traits


class APIError(Exception):
    def __init__(self, status_code: int, payload: dict):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"{status_code}: {payload.get('error') or payload.get('detail') or payload}")


class VibeFIDClient:
    """Thin HTTP client for the VibeFID trait service."""

    def __init__(self, base_url: str = config.API_URL, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _handle(self, response):
        try:
            payload = response.json()
        except ValueError:
            payload = {"error": response.text}
        if not response.ok:
            raise APIError(response.status_code, payload)
        return payload

    def _get(self, path: str, params: dict = None):
        response = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        return self._handle(response)

    def _post(self, path: str, payload: dict):
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        return self._handle(response)

    def get_traits(self, fid: int, extra_seed: float = None):
        """Deterministic traits, or a reroll preview when extra_seed is given."""
        params = {"extra_seed": extra_seed} if extra_seed is not None else None
        return self._get(f"/traits/{fid}", params)

    def get_trait_info(self, fid: int):
        return self._get(f"/traits/{fid}/info")

    def validate_card(self, fid: int, neynar_score: float, rarity: str, foil: str, wear: str, power: int):
        return self._post("/cards/validate", {
            "fid": fid,
            "neynar_score": neynar_score,
            "rarity": rarity,
            "foil": foil,
            "wear": wear,
            "power": power,
        })

    def mint_card(self, address: str, fid: int, username: str, display_name: str,
                  neynar_score: float, **extra):
        payload = {
            "address": address,
            "fid": fid,
            "username": username,
            "display_name": display_name,
            "neynar_score": neynar_score,
        }
        payload.update({k: v for k, v in extra.items() if v is not None})
        return self._post("/cards/mint", payload)

    def get_card(self, fid: int):
        return self._get(f"/cards/{fid}")

    def get_metadata(self, fid: int):
        return self._get(f"/metadata/fid/{fid}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vibefid", description="Preview VibeFID card traits")
    parser.add_argument("--url", default=config.API_URL, help="trait service base url")
    sub = parser.add_subparsers(dest="command", required=True)

    preview = sub.add_parser("preview", help="show the traits an FID mints with")
    preview.add_argument("fid", type=int)
    preview.add_argument("--reroll", action="store_true", help="random preview instead of the mint roll")

    local = sub.add_parser("local", help="roll traits in-process, no server needed")
    local.add_argument("fid", type=int)
    local.add_argument("--reroll", action="store_true")

    for name, help_text in (("info", "tier and odds for an FID"),
                            ("card", "stored card for an FID"),
                            ("metadata", "OpenSea metadata for an FID")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("fid", type=int)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "local":
        extra_seed = time.time() * 1000 if args.reroll else None
        traits = get_fid_traits(args.fid, extra_seed)
        print_traits({"fid": args.fid, **traits.to_dict(), "deterministic": extra_seed is None})
        return 0

    client = VibeFIDClient(args.url)
    try:
        if args.command == "preview":
            extra_seed = time.time() * 1000 if args.reroll else None
            print_traits(client.get_traits(args.fid, extra_seed))
        elif args.command == "info":
            data = client.get_trait_info(args.fid)
            print_info(data["tier"])
            print_odds("Foil", data["foil_odds"])
            print_odds("Wear", data["wear_odds"])
        elif args.command == "card":
            print_card(client.get_card(args.fid)["card"])
        elif args.command == "metadata":
            print(json.dumps(client.get_metadata(args.fid), indent=2))
    except APIError as e:
        print_info(f"Request failed: {e}")
        return 1
    except requests.RequestException as e:
        print_info(f"Could not reach {args.url}: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
