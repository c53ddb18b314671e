# sdk/pyshowroom.py
import requests
import httpx
from typing import Optional, Union, List, Dict, Any


class ShowroomClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def _locale(self, lang: str, currency: str) -> Dict[str, str]:
        return {"lang": lang, "currency": currency}

    # Translation
    def translate_product(self, name: str, description: str, details: Optional[Dict[str, str]] = None):
        r = self.session.post(f"{self.base_url}/translate-product", json={
            "name": name, "description": description, "details": details
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def translate_text(self, text: Union[str, List[str]], target_lang: str = "ar"):
        r = self.session.post(f"{self.base_url}/translate-text", json={
            "text": text, "target_lang": target_lang
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()["translatedText"]

    async def translate_text_async(self, text: Union[str, List[str]], target_lang: str = "ar"):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/translate-text", json={"text": text, "target_lang": target_lang})
            r.raise_for_status()
            return r.json()["translatedText"]

    # Catalog
    def list_catalog(self, lang: str = "en", currency: str = "EGP", q: str = "", category: Optional[str] = None):
        params = self._locale(lang, currency)
        if q:
            params["q"] = q
        if category:
            params["category"] = category
        r = self.session.get(f"{self.base_url}/catalog", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def featured(self, lang: str = "en", currency: str = "EGP", limit: int = 3):
        params = self._locale(lang, currency)
        params["limit"] = str(limit)
        r = self.session.get(f"{self.base_url}/catalog/featured", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_vehicle(self, product_id: int, lang: str = "en", currency: str = "EGP"):
        r = self.session.get(f"{self.base_url}/catalog/{product_id}", params=self._locale(lang, currency),
                             timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def submit_inquiry(self, name: str, email: str, phone: Optional[str] = None,
                       vehicle_name: Optional[str] = None, message: Optional[str] = None):
        r = self.session.post(f"{self.base_url}/inquiries", json={
            "name": name, "email": email, "phone": phone, "vehicle_name": vehicle_name, "message": message
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Admin
    def save_product(self, product: Dict[str, Any], product_id: Optional[int] = None):
        if product_id is None:
            r = self.session.post(f"{self.base_url}/admin/products", json=product, timeout=self.timeout)
        else:
            r = self.session.put(f"{self.base_url}/admin/products/{product_id}", json=product, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/admin/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list_inquiries(self):
        r = self.session.get(f"{self.base_url}/admin/inquiries", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_exchange_rate(self):
        r = self.session.get(f"{self.base_url}/admin/settings/exchange-rate", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def set_exchange_rate(self, value: float):
        r = self.session.put(f"{self.base_url}/admin/settings/exchange-rate", json={"value": value},
                             timeout=self.timeout)
        r.raise_for_status()
        return r.json()


if __name__ == "__main__":
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Showroom SDK CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:8085", help="Showroom service URL")
    parser.add_argument("--token", help="Bearer token forwarded to the hosted store (admin commands)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lc = subparsers.add_parser("catalog", help="List vehicles")
    lc.add_argument("--lang", default="en", choices=["en", "ar"])
    lc.add_argument("--currency", default="EGP", choices=["USD", "EGP"])
    lc.add_argument("--q", default="", help="Filter by name")
    lc.add_argument("--category", help="Filter by category")

    gv = subparsers.add_parser("vehicle", help="Show one vehicle")
    gv.add_argument("--id", type=int, required=True, help="Vehicle ID")
    gv.add_argument("--lang", default="en", choices=["en", "ar"])
    gv.add_argument("--currency", default="EGP", choices=["USD", "EGP"])

    tt = subparsers.add_parser("translate", help="Translate one or more strings")
    tt.add_argument("text", nargs="+", help="Text to translate")
    tt.add_argument("--target", default="ar", help="Target language")

    sr = subparsers.add_parser("set-rate", help="Set the USD to EGP exchange rate")
    sr.add_argument("value", type=float, help="EGP per USD")

    args = parser.parse_args()
    client = ShowroomClient(base_url=args.base_url, api_key=args.token)

    if args.command == "catalog":
        out = client.list_catalog(args.lang, args.currency, args.q, args.category)
    elif args.command == "vehicle":
        out = client.get_vehicle(args.id, args.lang, args.currency)
    elif args.command == "translate":
        out = client.translate_text(args.text[0] if len(args.text) == 1 else args.text, args.target)
    else:
        out = client.set_exchange_rate(args.value)
    print(json.dumps(out, ensure_ascii=False, indent=2))
