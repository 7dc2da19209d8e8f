"""AuditorIA 客户端：登录会话、文件审计、AI 分析与销售预测。"""
__version__ = "0.1.0"
