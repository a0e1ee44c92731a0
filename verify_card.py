import requests

BASE_URL = "http://localhost:8000/api"

def run_test():
    trip = {
        "destination": "Kyoto", "dates": "2026-04-01 to 2026-04-04", "travelers": "2 adults",
        "budget": "Mid-range", "pace": "Slow", "interests": "temples, tea, gardens"
    }
    resp = requests.post(f"{BASE_URL}/plan", json={"trip": trip, "language": "en"})
    if resp.status_code != 200:
        print("Plan error:", resp.text)
        return
    plan = resp.json()
    print(f"Plan: {len(plan['markdown'])} chars")

    resp = requests.post(f"{BASE_URL}/blocks", json={"markdown": plan["markdown"]})
    blocks = resp.json()["blocks"]
    print(f"Blocks: {len(blocks)} ({sum(1 for b in blocks if b['type'] == 'table')} tables)")

    resp = requests.post(f"{BASE_URL}/share", json={"plan": plan, "language": "en"})
    share = resp.json()
    print(f"Share URL: {share['url']}")

    for ratio in ("1:1", "9:16"):
        card_payload = {"trip": trip, "share_id": share["id"], "ratio": ratio, "language": "en"}
        resp = requests.post(f"{BASE_URL}/card", json=card_payload)
        if resp.status_code == 200:
            filename = resp.headers["content-disposition"].split("filename=")[1].strip('"')
            with open(filename, "wb") as f:
                f.write(resp.content)
            print(f"Saved {filename} ({len(resp.content)} bytes)")
        else:
            print("Card error:", resp.text)

if __name__ == "__main__":
    run_test()
