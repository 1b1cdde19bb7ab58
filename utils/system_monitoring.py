#!/usr/bin/env python3
"""
System Monitoring Module

Reports process memory and CPU usage while a language model trains on a large
corpus. Monitoring is synchronous: metrics are sampled only when the caller asks
for them, so no background thread touches the model.
"""

import os
import time
import psutil
from datetime import datetime


class ResourceMonitor:
    """
    Samples process resources and logs progress of long-running operations.
    """

    def __init__(self, logger, memory_warning_percentage=85):
        """
        Initialize the resource monitor.

        Args:
            logger: Logger instance for recording resource metrics
            memory_warning_percentage (float): System memory usage (percent)
                above which progress reports are logged as warnings
        """
        self.logger = logger
        self.memory_warning_percentage = memory_warning_percentage
        self.process = psutil.Process(os.getpid())

        self.current_operation = None
        self.operation_start_time = None

    def get_resource_usage(self):
        """
        Get resource usage statistics for the current process.

        Returns:
            dict: Memory and CPU metrics
        """
        memory_info = self.process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            "timestamp": datetime.now().isoformat(),
            "memory": {
                "current_mb": memory_info.rss / (1024 * 1024),
                "system_percent_used": system_memory.percent,
                "system_total_mb": system_memory.total / (1024 * 1024)
            },
            "cpu": {
                # Non-blocking: usage since the previous call
                "process_percent": self.process.cpu_percent(interval=None),
                "logical_cores": psutil.cpu_count(logical=True)
            },
            "process_id": self.process.pid
        }

    def start(self, operation_name=None):
        """
        Mark the start of an operation and log the initial resource usage.

        Args:
            operation_name (str, optional): Name of the operation being monitored
        """
        self.current_operation = operation_name
        self.operation_start_time = time.time()

        self.logger.info(f"Resource monitoring started for operation: {operation_name}", extra={
            "metrics": self.get_resource_usage(),
            "operation": operation_name
        })

    def log_progress(self, message, operation=None, extra_metrics=None):
        """
        Log progress of the current operation with resource metrics.

        Args:
            message (str): Progress message to log
            operation (str, optional): Operation name (updates current_operation if provided)
            extra_metrics (dict, optional): Additional metrics to include in the log
        """
        if operation:
            self.current_operation = operation

        resources = self.get_resource_usage()
        metrics = {"system_resources": resources}
        if extra_metrics:
            metrics.update(extra_metrics)

        if self.operation_start_time:
            metrics["elapsed_time"] = time.time() - self.operation_start_time

        if resources["memory"]["system_percent_used"] > self.memory_warning_percentage:
            self.logger.warning(f"{message} (high memory usage)", extra={
                "metrics": metrics,
                "operation": self.current_operation
            })
        else:
            self.logger.info(message, extra={
                "metrics": metrics,
                "operation": self.current_operation
            })

    def stop(self):
        """
        Log final resource usage and reset operation tracking.

        Returns:
            float or None: Duration of the operation in seconds, if one was started
        """
        if self.operation_start_time is None:
            return None

        duration = time.time() - self.operation_start_time
        self.logger.info("Resource monitoring stopped", extra={
            "metrics": {
                "system_resources": self.get_resource_usage(),
                "duration": duration
            },
            "operation": self.current_operation
        })

        self.current_operation = None
        self.operation_start_time = None
        return duration
