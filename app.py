import argparse
import logging
import sys
from pathlib import Path

from personal_color.analyzer import analyze_face
from personal_color.color_math import normalize_hex
from personal_color.errors import InvalidInputError
from personal_color.image_loader import load_image
from personal_color.palette import palette_frame
from personal_color.palette_classifier import classify_color, rate_color_for_season
from personal_color.season_profiles import get_season_profile, quality_messages
from personal_color.season_visualizer import visualize_skin_position
from personal_color.visualize_palette import append_palette_to_face, save_rgb

logger = logging.getLogger("app")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Personal colour season analysis")
    parser.add_argument("image", help="path to a face photo")
    parser.add_argument("--classify", nargs="*", default=[], metavar="HEX",
                        help="garment colours to classify against the palette")
    parser.add_argument("--save-dir", type=Path, default=None,
                        help="write skin_position.png and palette_result.jpg here")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


# ============================================================
# output
# ============================================================
def print_analysis(result):
    print(f"Season: {result.season.value} (confidence {result.season_confidence:.2f})")
    undertone = result.undertone.value
    if result.undertone_lean is not None:
        undertone += f" (leaning {result.undertone_lean.value})"
    print(f"Undertone: {undertone}")
    print(f"Depth: {result.depth.value}")
    print(f"Clarity: {result.clarity.value}")
    print(f"Skin: {result.skin_hex} Lab=({result.skin_lab.L:.1f}, {result.skin_lab.a:.1f}, {result.skin_lab.b:.1f})")
    print(f"Face box: {result.face_box.as_tuple()} [{result.diagnostics['detection_method']}]")

    for candidate in result.season_candidates:
        print(f"  {candidate.season.value:7s} {candidate.score:.2f}  {', '.join(candidate.reasons)}")

    if result.needs_confirmation:
        print("Please confirm this result:")
        for message in quality_messages(result.quality_issues):
            print(f"  - {message}")

    profile = get_season_profile(result.season)
    print(profile.description)
    print("Best colours:", ", ".join(profile.best_colors))
    print("Avoid:", ", ".join(profile.avoid_colors))


def print_classification(hex_color, season=None):
    result = classify_color(hex_color)
    line = f"{result.input_hex}: {result.status.value} nearest={result.nearest_color_name} " \
           f"({result.nearest_hex}) ΔE={result.min_delta_e:.2f}"
    if result.season_tag is not None:
        line += f" → {result.season_tag.value}/{result.group_tag.value}"
    print(line)

    if season is not None:
        rating = rate_color_for_season(hex_color, season)
        print(f"  for {season.value}: {rating.rating} (closest {rating.nearest_color_name}, ΔE={rating.delta_e:.2f})")


def save_visuals(image, result, save_dir):
    save_dir.mkdir(parents=True, exist_ok=True)

    plot_path = visualize_skin_position(result.skin_lab, save_path=save_dir / "skin_position.png")
    print(f"Skin position plot saved → {plot_path}")

    combined = append_palette_to_face(image, palette_frame(result.season), block_size=80, max_rows=2)
    palette_path = save_rgb(combined, save_dir / "palette_result.jpg")
    print(f"Palette image saved → {palette_path}")


# ============================================================
# main
# ============================================================
def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    logger.info("analysing %s", args.image)
    try:
        image = load_image(args.image)
        result = analyze_face(image)
        args.classify = [normalize_hex(h) for h in args.classify]
    except FileNotFoundError:
        print(f"Image not found: {args.image}")
        return 1
    except InvalidInputError as e:
        print(f"Invalid input: {e}")
        return 2

    if not result.face_detected:
        print(f"Face not detected ({result.reason.value}): {result.message}")
        for hex_color in args.classify:
            print_classification(hex_color)
        return 1

    print_analysis(result)
    for hex_color in args.classify:
        print_classification(hex_color, result.season)

    if args.save_dir is not None:
        save_visuals(image, result, args.save_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
