"""
Модуль сообщений (RabbitMQ + FastStream).

Содержит:
- модель сообщения и wire-контракт
- привязку каналов к broker'у
- publisher (выходной канал) и обработчик subscriber'а (входной канал)
- worker процесса subscriber'а
"""
