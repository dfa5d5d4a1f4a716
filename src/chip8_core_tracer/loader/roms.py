# chip8_core_tracer/loader/roms.py
"""
同梱のデモROM。

0-F のフォントを2行に描画した後、キー入力待ちに入り、
押されたキーの数字を画面下部に表示して短くブザーを鳴らします。
"""

DEMO_ROM_NAME = "hexdemo"

DEMO_ROM = bytes([
    0x00, 0xE0,  # 200: CLS
    0x60, 0x00,  # 202: LD   V0, 0x00     ; 描画する数字
    0x61, 0x01,  # 204: LD   V1, 0x01     ; x
    0x62, 0x01,  # 206: LD   V2, 0x01     ; y
    0xF0, 0x29,  # 208: LD   F, V0        ; draw_loop
    0xD1, 0x25,  # 20A: DRW  V1, V2, 5
    0x71, 0x06,  # 20C: ADD  V1, 0x06
    0x70, 0x01,  # 20E: ADD  V0, 0x01
    0x40, 0x08,  # 210: SNE  V0, 0x08
    0x12, 0x1A,  # 212: JP   0x21A        ; 2行目へ
    0x40, 0x10,  # 214: SNE  V0, 0x10
    0x12, 0x20,  # 216: JP   0x220        ; 描画完了
    0x12, 0x08,  # 218: JP   0x208
    0x61, 0x01,  # 21A: LD   V1, 0x01
    0x72, 0x08,  # 21C: ADD  V2, 0x08
    0x12, 0x08,  # 21E: JP   0x208
    0x63, 0x01,  # 220: LD   V3, 0x01
    0x64, 0x14,  # 222: LD   V4, 0x14
    0xF5, 0x0A,  # 224: LD   V5, K
    0xF5, 0x29,  # 226: LD   F, V5        ; show_key
    0xD3, 0x45,  # 228: DRW  V3, V4, 5
    0x66, 0x0A,  # 22A: LD   V6, 0x0A
    0xF6, 0x18,  # 22C: LD   ST, V6
    0xF6, 0x0A,  # 22E: LD   V6, K
    0xD3, 0x45,  # 230: DRW  V3, V4, 5    ; 前の数字を消す
    0x85, 0x60,  # 232: LD   V5, V6
    0x12, 0x26,  # 234: JP   0x226
])
