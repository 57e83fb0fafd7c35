import os
import csv
import time
import argparse
import requests
from concurrent.futures import ThreadPoolExecutor

# ================= CONFIGURATION =================
API_URL = os.getenv("LINKSCAN_API_URL", "http://localhost:8000/api/v1/analyze")
OUTPUT_CSV = "scan_results.csv"
MAX_WORKERS = 4
# =================================================

def load_urls(file_path):
    """One URL per line; blank lines and # comments are skipped."""
    urls = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                urls.append(line)
    return urls

def scan_url(url, api_url=API_URL):
    """Sends a single URL to the API and returns a result row."""
    try:
        start_time = time.time()
        response = requests.post(api_url, json={'url': url}, timeout=30)
        duration = time.time() - start_time

        if response.status_code == 200:
            data = response.json()
            level = data.get('risk_level', 'unknown')
            score = data.get('risk_score', 0)
            icon = {'safe': '🟢', 'suspicious': '🟡', 'dangerous': '🔴'}.get(level, '⚪')

            print(f"{icon} {url[:40]:<40} | {level:<10} ({score}) | {duration:.2f}s")
            return {'url': url, 'risk_level': level, 'risk_score': score, 'status': 'SUCCESS'}
        else:
            print(f"⚠️ {url} | API Error: {response.status_code}")
            return {'url': url, 'risk_level': '', 'risk_score': '', 'status': 'API_ERROR'}

    except requests.RequestException as e:
        print(f"❌ {url} | Failed: {str(e)}")
        return {'url': url, 'risk_level': '', 'risk_score': '', 'status': 'CONNECTION_ERROR'}

def write_csv(results, output_path):
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=['url', 'risk_level', 'risk_score', 'status'])
        writer.writeheader()
        writer.writerows(results)

def main():
    parser = argparse.ArgumentParser(description='Scan a list of URLs against a running LinkScan API')
    parser.add_argument('url_file', help='Text file with one URL per line')
    parser.add_argument('--api-url', default=API_URL, help='Analyze endpoint')
    parser.add_argument('--output', default=OUTPUT_CSV, help='CSV report path')
    parser.add_argument('--workers', type=int, default=MAX_WORKERS)
    args = parser.parse_args()

    print("\n" + "="*50)
    print("🚀 LINKSCAN BATCH SCANNER")
    print("="*50)

    if not os.path.exists(args.url_file):
        print(f"❌ File not found: {args.url_file}")
        return

    urls = load_urls(args.url_file)
    if not urls:
        print("❌ No URLs found!")
        return

    print(f"📦 Found {len(urls)} URLs.")

    with ThreadPoolExecutor(max_workers=args.workers) as executor:
        results = list(executor.map(lambda u: scan_url(u, args.api_url), urls))

    write_csv(results, args.output)

    successful_runs = [r for r in results if r['status'] == 'SUCCESS']
    counts = {level: sum(1 for r in successful_runs if r['risk_level'] == level)
              for level in ('safe', 'suspicious', 'dangerous')}

    print("\n" + "="*50)
    print("📊 SCAN REPORT")
    print("="*50)
    print(f"Scanned: {len(successful_runs)}/{len(results)}")
    print(f"Safe: {counts['safe']} | Suspicious: {counts['suspicious']} | Dangerous: {counts['dangerous']}")
    print(f"📝 Results written to {args.output}")
    print("="*50)

if __name__ == "__main__":
    main()
