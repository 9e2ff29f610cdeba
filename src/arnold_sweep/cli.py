# -*- coding: utf-8 -*-
import argparse
import logging
import sys

from arnold_sweep.analysis.ranker import ResultRanker
from arnold_sweep.config import Config
from arnold_sweep.console import PromptParameterSource, StaticParameterSource, TqdmProgress, prompt_image_path
from arnold_sweep.img_process import ImageProcessor
from arnold_sweep.scrambling.transform import check_square
from arnold_sweep.sweep.orchestrator import SweepOrchestrator
from arnold_sweep.utils.logger import setup_logger


def build_parser():
    parser = argparse.ArgumentParser(description="Arnold 置乱参数爆破工具")

    parser.add_argument("image", nargs="?", help="置乱图像路径 (省略时交互输入)")
    parser.add_argument("--times", "-k", help="变换次数，如 '8' 或 '0-10'")
    parser.add_argument("-a", help="参数 a，如 '1' 或 '0-10'；负数需写成 -a=-3--1")
    parser.add_argument("-b", help="参数 b，如 '1' 或 '0-10'；负数需写成 -b=-3--1")
    parser.add_argument("--out", "-o", default=None, help=f"输出目录 (默认: 图像所在目录/{Config.OUTPUT_DIR_NAME})")
    parser.add_argument("--workers", "-w", type=int, default=None, help="并行线程数")
    parser.add_argument("--top", "-t", type=int, default=Config.TOP_K, help="输出得分最低的结果数量")
    parser.add_argument("--rank-only", metavar="DIR", default=None, help="只对已有输出目录重新评分排序")
    parser.add_argument("--no-pause", action="store_true", help="结束时不等待回车")
    parser.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")
    return parser


def rank_and_report(output_dir, workers, top_k):
    ranker = ResultRanker(max_workers=workers)
    with TqdmProgress("分析中", colour="yellow") as progress:
        candidates = ranker.rank(output_dir, progress=progress)
    return ranker.report(candidates, top_k)


def run(args):
    """
    执行完整的爆破流程，返回退出码
    """
    if args.rank_only:
        rank_and_report(args.rank_only, args.workers, args.top)
        return 0

    interactive = args.image is None
    image_path = prompt_image_path() if interactive else args.image

    processor = ImageProcessor()
    encoded_image = processor.read_image(image_path)
    check_square(encoded_image)
    info = processor.get_image_info(encoded_image)
    print(f"✅ 图片加载成功: {info['width']}x{info['height']}")
    print("-" * 40)

    if args.times is not None and args.a is not None and args.b is not None:
        source = StaticParameterSource(args.times, args.a, args.b)
    else:
        # 只提示命令行没有给出的参数
        source = PromptParameterSource(known={"k": args.times, "a": args.a, "b": args.b})
    search_space = source.search_space()
    print("-" * 40)

    output_dir = processor.prepare_output_dir(image_path, args.out)
    print(f"🚀 输出结果将保存在: {output_dir}\n")

    orchestrator = SweepOrchestrator(max_workers=args.workers, image_processor=processor)
    with TqdmProgress("解码中", colour="green") as progress:
        report = orchestrator.run(encoded_image, search_space, output_dir, progress=progress)
    if report.total == 0:
        return 0

    print(f"\n⏱️ 用时: {report.elapsed:.2f} 秒")
    if report.failures:
        print(f"⚠️ {len(report.failures)} 个候选保存失败")
    print("🎉 处理完成")

    try:
        rank_and_report(output_dir, args.workers, args.top)
    except Exception as e:
        print(f"❌ 分析过程中发生错误: {e}", file=sys.stderr)

    if interactive and not args.no_pause:
        input("\nPress Enter to exit...")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logger("arnold_sweep", logging.DEBUG if args.verbose else logging.WARNING)

    print(Config.BANNER)
    try:
        return run(args)
    except (OSError, ValueError) as e:
        print(f"\n❌ {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\n已取消", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
