"""
spritepacker Quick Start Example

This example shows the basic usage of spritepacker to pack sprite sizes into sheets.
"""

import os

from spritepacker import SpritePacker

# Initialize spritepacker (1024x1024 sheets unless SPRITEPACKER_SHEET_SIZE is set)
sp = SpritePacker()

print("Packing the ten-image example...")
result = sp.pack("864x480 78x107 410x321 188x167 315x274 229x163 629x236 39x32 193x56 543x155".split())
print(result.to_text())

print("Saving listing and manifest...")
os.makedirs("output", exist_ok=True)
result.save("output/sheets.txt")
result.save("output/sheets.json")
print("✅ Saved to output/sheets.txt and output/sheets.json")

for i, used in enumerate(result.stats()["utilization"], start=1):
    print(f"Sheet {i}: {used:.1%} used")

# Rendering real images needs files on disk:
# sp.build_atlas(["sprites/hero.png", "sprites/tree.png"], "output/atlas")
