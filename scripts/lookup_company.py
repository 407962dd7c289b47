#!/usr/bin/env python3
"""
Company Lookup Script

Resolve one or more companies end to end (cache, dataset, web sources,
fallbacks) and print what came back.
Usage: python scripts/lookup_company.py "Etsy" "Infosys BPM"
"""
import asyncio
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.services.container import ServiceContainer


async def lookup(names):
    container = ServiceContainer.build(get_settings())
    await container.startup()
    try:
        for name in names:
            print("\n" + "=" * 50)
            print(f"🔍 {name}")
            print("=" * 50)
            result = await container.resolver.resolve(name)
            if not result.success:
                print(f"❌ {result.error}")
            if result.data is None:
                continue
            profile = result.data
            print(f"Source:       {profile.source.value}")
            print(f"Name:         {profile.name}")
            print(f"Industry:     {profile.industry}")
            print(f"Founded:      {profile.founded}")
            print(f"Headquarters: {profile.headquarters}")
            print(f"Employees:    {profile.employee_count}")
            print(f"Website:      {profile.website}")
            print(f"Description:  {profile.description[:200]}")
    finally:
        await container.shutdown()


def main():
    names = sys.argv[1:]
    if not names:
        print(__doc__)
        sys.exit(1)
    asyncio.run(lookup(names))


if __name__ == "__main__":
    main()
