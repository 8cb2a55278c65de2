#!/usr/bin/env python3
"""
健康探测本地运行入口

在本地执行一次与函数入口相同的健康检查调用，
用于调试配置和验证告警通道。
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from health_probe.handler import handle_event
from health_probe.services.config_manager import ConfigManager
from health_probe.utils.exceptions import ConfigError, MalformedRequestError
from health_probe.utils.log_manager import configure_logging, log_manager
from health_probe.version import __version__


def create_argument_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog='health-probe',
        description='健康探测 - 探测目标URL，服务端错误时发送Slack告警',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  %(prog)s --url https://example.com/health       # 探测指定URL
  %(prog)s --event event.json                     # 使用事件文件
  cat event.json | %(prog)s --event -             # 从标准输入读取事件
  %(prog)s --validate-config config.yaml          # 验证配置文件
  %(prog)s --version                              # 显示版本信息

环境变量:
  SLACK_BOT_TOKEN      Slack机器人令牌（仅发送通知时需要）
  SLACK_CHANNEL        告警频道，默认 notifications
  HEALTH_PROBE_CONFIG  YAML配置文件路径
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '--url', '-u',
        help='要探测的URL'
    )
    source.add_argument(
        '--event', '-e',
        help='触发事件JSON文件路径，"-" 表示标准输入'
    )
    source.add_argument(
        '--validate-config',
        metavar='CONFIG_FILE',
        help='验证配置文件格式并退出'
    )

    parser.add_argument(
        '--config', '-c',
        help='YAML配置文件路径（覆盖HEALTH_PROBE_CONFIG）'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='设置日志级别（覆盖配置文件设置）'
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def validate_config_file(config_path: str) -> bool:
    """验证配置文件

    Args:
        config_path: 配置文件路径

    Returns:
        验证是否成功
    """
    try:
        print(f"正在验证配置文件: {config_path}")
        config = ConfigManager(config_path).load_config()
        print("✅ 配置文件验证成功!")
        print(f"   - 告警频道: {config.slack_channel}")
        print(f"   - 探测超时: {config.probe_timeout}s")
        print(f"   - 已配置令牌: {'是' if config.slack_bot_token else '否'}")
        return True
    except ConfigError as e:
        print(f"❌ 配置文件验证失败: {e}")
        return False


def load_event(args: argparse.Namespace) -> Dict[str, Any]:
    """根据命令行参数构造触发事件

    Args:
        args: 命令行参数

    Returns:
        触发事件
    """
    if args.url is not None:
        return {'detail': {'url': args.url}}

    if args.event == '-':
        return json.load(sys.stdin)

    with open(args.event, 'r', encoding='utf-8') as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    """主函数

    Returns:
        退出码：0成功，1事件无效或配置错误
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.validate_config:
        return 0 if validate_config_file(args.validate_config) else 1

    if args.url is None and args.event is None:
        parser.print_help()
        return 1

    try:
        event = load_event(args)
    except (OSError, json.JSONDecodeError) as e:
        print(f"读取事件失败: {e}", file=sys.stderr)
        return 1

    try:
        config = ConfigManager(args.config).load_config()
        logging_config = config.logging_config()
        if args.log_level:
            logging_config['log_level'] = args.log_level
        configure_logging(logging_config)

        result = asyncio.run(handle_event(event, config=config))
    except MalformedRequestError as e:
        print(f"触发事件无效: {e.format_error()}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(f"配置错误: {e.format_error()}", file=sys.stderr)
        return 1
    finally:
        log_manager.cleanup()

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def cli() -> None:
    """控制台脚本入口"""
    sys.exit(main())


if __name__ == "__main__":
    cli()
