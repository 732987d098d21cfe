# bgftool/palette_data.py
from __future__ import annotations

"""
Fixed 256-colour palette of the BGF sprite format.

Exports:
  PALETTE: tuple of 256 (r, g, b) byte triples, in index order
  PALETTE_SIZE: 256
  TRANSPARENT_INDEX: 254
  TRANSPARENT_COLOR: (0, 255, 255), the marker colour compared against
    source pixels. Not read from the table.
"""

from typing import Tuple

from .core_types import RGBTuple

PALETTE_SIZE = 256
TRANSPARENT_INDEX = 254
TRANSPARENT_COLOR: RGBTuple = (0, 255, 255)

PALETTE: Tuple[RGBTuple, ...] = (
    # 0
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 0, 0),
    (0, 128, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 0, 0),
    (0, 128, 0),
    # 16
    (194, 1, 1),
    (180, 1, 1),
    (171, 2, 2),
    (166, 1, 1),
    (154, 2, 2),
    (145, 2, 0),
    (137, 2, 0),
    (127, 0, 0),
    (120, 2, 0),
    (109, 1, 0),
    (86, 0, 0),
    (76, 0, 0),
    (64, 0, 0),
    (56, 0, 0),
    (38, 0, 0),
    (17, 0, 0),
    # 32
    (254, 194, 148),
    (235, 184, 146),
    (219, 169, 131),
    (203, 157, 124),
    (198, 148, 117),
    (181, 135, 105),
    (177, 136, 102),
    (168, 128, 96),
    (157, 115, 86),
    (145, 107, 81),
    (136, 96, 72),
    (122, 88, 68),
    (117, 84, 64),
    (104, 77, 59),
    (96, 70, 49),
    (74, 59, 45),
    # 48
    (255, 181, 128),
    (243, 168, 114),
    (220, 153, 104),
    (202, 141, 97),
    (196, 130, 87),
    (185, 122, 81),
    (171, 115, 71),
    (165, 110, 68),
    (147, 92, 54),
    (133, 82, 49),
    (123, 70, 38),
    (107, 61, 34),
    (99, 56, 28),
    (85, 47, 24),
    (75, 40, 13),
    (50, 28, 11),
    # 64
    (185, 95, 43),
    (145, 70, 26),
    (131, 63, 24),
    (121, 59, 22),
    (119, 52, 18),
    (114, 47, 16),
    (105, 48, 12),
    (102, 45, 12),
    (94, 37, 12),
    (84, 34, 12),
    (75, 27, 11),
    (65, 25, 11),
    (60, 23, 11),
    (51, 20, 11),
    (42, 20, 11),
    (27, 15, 10),
    # 80
    (255, 178, 51),
    (255, 169, 27),
    (255, 165, 17),
    (250, 156, 0),
    (238, 148, 0),
    (216, 135, 0),
    (204, 127, 0),
    (194, 121, 0),
    (170, 106, 0),
    (160, 100, 0),
    (136, 85, 0),
    (126, 79, 0),
    (104, 65, 0),
    (92, 57, 0),
    (68, 42, 0),
    (48, 30, 0),
    # 96
    (137, 177, 116),
    (130, 169, 110),
    (120, 161, 100),
    (112, 149, 92),
    (103, 139, 83),
    (95, 129, 76),
    (88, 124, 73),
    (80, 112, 66),
    (71, 101, 55),
    (62, 90, 49),
    (48, 79, 38),
    (41, 68, 31),
    (37, 62, 22),
    (28, 48, 16),
    (16, 30, 8),
    (7, 14, 3),
    # 112
    (0, 196, 50),
    (0, 184, 47),
    (0, 170, 43),
    (0, 158, 39),
    (0, 154, 39),
    (0, 140, 36),
    (0, 138, 35),
    (0, 126, 32),
    (0, 114, 29),
    (0, 98, 25),
    (0, 80, 20),
    (0, 69, 17),
    (0, 62, 16),
    (0, 48, 12),
    (0, 26, 7),
    (0, 14, 4),
    # 128
    (171, 213, 222),
    (165, 206, 215),
    (137, 188, 197),
    (127, 172, 179),
    (112, 154, 163),
    (106, 145, 154),
    (78, 129, 137),
    (72, 117, 125),
    (52, 95, 103),
    (46, 85, 93),
    (27, 70, 78),
    (23, 61, 70),
    (10, 52, 61),
    (6, 41, 48),
    (3, 27, 33),
    (0, 9, 11),
    # 144
    (52, 78, 222),
    (50, 74, 211),
    (43, 62, 199),
    (42, 58, 188),
    (36, 52, 171),
    (34, 48, 161),
    (27, 44, 146),
    (23, 38, 132),
    (10, 27, 120),
    (8, 24, 107),
    (2, 18, 86),
    (1, 15, 75),
    (0, 10, 70),
    (0, 7, 59),
    (0, 3, 41),
    (0, 0, 24),
    # 160
    (160, 66, 194),
    (153, 63, 185),
    (148, 56, 178),
    (134, 46, 162),
    (122, 44, 161),
    (110, 40, 147),
    (102, 36, 139),
    (94, 32, 129),
    (86, 24, 111),
    (78, 18, 99),
    (63, 3, 85),
    (54, 0, 76),
    (45, 0, 62),
    (33, 0, 47),
    (23, 0, 32),
    (10, 0, 16),
    # 176
    (244, 240, 206),
    (237, 231, 176),
    (235, 228, 163),
    (229, 220, 137),
    (216, 215, 246),
    (187, 186, 240),
    (175, 173, 237),
    (148, 145, 231),
    (156, 233, 156),
    (132, 228, 132),
    (90, 215, 90),
    (40, 184, 40),
    (242, 197, 197),
    (232, 152, 152),
    (225, 119, 119),
    (220, 98, 98),
    # 192
    (255, 234, 110),
    (250, 222, 55),
    (247, 213, 27),
    (240, 208, 25),
    (238, 202, 26),
    (222, 189, 25),
    (220, 196, 19),
    (207, 185, 16),
    (197, 180, 10),
    (185, 167, 8),
    (154, 137, 2),
    (135, 122, 0),
    (128, 115, 0),
    (119, 113, 0),
    (112, 106, 0),
    (85, 81, 0),
    # 208
    (231, 231, 231),
    (213, 213, 213),
    (205, 205, 205),
    (188, 188, 188),
    (180, 180, 180),
    (163, 163, 163),
    (154, 154, 154),
    (146, 146, 146),
    (129, 129, 129),
    (120, 120, 120),
    (103, 103, 103),
    (95, 95, 95),
    (78, 78, 78),
    (70, 70, 70),
    (52, 52, 52),
    (36, 36, 36),
    # 224
    (124, 191, 255),
    (103, 171, 239),
    (95, 163, 231),
    (95, 154, 213),
    (78, 137, 197),
    (70, 120, 171),
    (61, 112, 163),
    (60, 107, 154),
    (52, 95, 137),
    (44, 82, 119),
    (27, 65, 103),
    (17, 47, 77),
    (10, 36, 61),
    (5, 24, 43),
    (1, 14, 27),
    (0, 11, 22),
    # 240
    (224, 180, 148),
    (208, 176, 132),
    (204, 168, 124),
    (196, 160, 116),
    (128, 0, 0),
    (0, 128, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

__all__ = ["PALETTE", "PALETTE_SIZE", "TRANSPARENT_INDEX", "TRANSPARENT_COLOR"]
